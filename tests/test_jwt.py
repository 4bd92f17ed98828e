"""
Tests for token issuance and stateless verification.
"""

import json
import time
from base64 import b64decode, b64encode

import pytest

from api.errors import AuthError
from auth.jwt import TokenClaims, TokenService


class TestTokenService:
    def setup_method(self):
        self.tokens = TokenService("unit-secret")

    def test_round_trip_claims(self):
        token = self.tokens.create_token(7, "alice", "Alice Smith")
        claims = self.tokens.verify_token(token)
        assert isinstance(claims, TokenClaims)
        assert claims.id == 7
        assert claims.username == "alice"
        assert claims.fullname == "Alice Smith"

    def test_expires_one_hour_after_issue(self):
        before = int(time.time())
        token = self.tokens.create_token(1, "a", None)
        payload = json.loads(b64decode(token.split(".")[0]))
        assert before + 3600 <= payload["exp"] <= int(time.time()) + 3600

    def test_tampered_signature_rejected(self):
        token = self.tokens.create_token(1, "a", "A")
        head, sig = token.split(".")
        forged = head + "." + ("0" if sig[0] != "0" else "1") + sig[1:]
        with pytest.raises(AuthError, match="bad signature"):
            self.tokens.verify_token(forged)

    def test_tampered_payload_rejected(self):
        token = self.tokens.create_token(1, "a", "A")
        _, sig = token.split(".")
        raw = json.dumps({"id": 2, "username": "root", "fullname": None, "exp": 2**31}).encode()
        with pytest.raises(AuthError):
            self.tokens.verify_token(b64encode(raw).decode() + "." + sig)

    def test_other_secret_rejected(self):
        token = TokenService("another-secret").create_token(1, "a", "A")
        with pytest.raises(AuthError):
            self.tokens.verify_token(token)

    def test_expired_token_rejected(self):
        token = TokenService("unit-secret", expiry_seconds=-10).create_token(1, "a", "A")
        with pytest.raises(AuthError, match="expired"):
            self.tokens.verify_token(token)

    @pytest.mark.parametrize("garbage", ["", "no-dot", "!!!.abc", "e30=.ü"])
    def test_malformed_tokens_rejected(self, garbage):
        with pytest.raises(AuthError):
            self.tokens.verify_token(garbage)

    def test_error_maps_to_401(self):
        with pytest.raises(AuthError) as exc_info:
            self.tokens.verify_token("bad")
        assert exc_info.value.status_code == 401
