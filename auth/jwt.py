"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
The secret is injected at startup from ``config.jwt_secret`` (env var:
``JWT_SECRET``). Verification is stateless: a token is valid while its
signature matches and ``exp`` lies in the future.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from base64 import b64decode, b64encode
from typing import Optional

from pydantic import BaseModel

from api.errors import AuthError

logger = logging.getLogger(__name__)


class TokenClaims(BaseModel):
    id: int
    username: str
    fullname: Optional[str] = None
    exp: int


class TokenService:
    def __init__(self, secret: str, expiry_seconds: int = 3600):
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def create_token(self, user_id: int, username: str, fullname: Optional[str]) -> str:
        """Create a signed token carrying the identity claims and expiry."""
        payload = {
            "id": user_id,
            "username": username,
            "fullname": fullname,
            "exp": int(time.time()) + self.expiry_seconds,
        }
        raw = json.dumps(payload).encode()
        return b64encode(raw).decode() + "." + self._sign(raw)

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify token and return its claims.

        Raises ``AuthError`` (401) on malformed, tampered or expired tokens.
        """
        try:
            parts = token.split(".", 1)
            if len(parts) != 2:
                raise ValueError("bad format")
            raw = b64decode(parts[0], validate=True)
            if not hmac.compare_digest(parts[1], self._sign(raw)):
                raise ValueError("bad signature")
            claims = TokenClaims.model_validate_json(raw)
            if claims.exp < time.time():
                raise ValueError("token expired")
            return claims
        except (ValueError, TypeError) as exc:
            logger.warning("Rejected token: %s", exc)
            raise AuthError(f"Invalid or expired token: {exc}") from exc
