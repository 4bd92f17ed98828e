"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_token_service`` and ``get_current_user``
dependencies that are used across all protected routes. The session
factory and token service live on ``app.state`` (set up in ``main.py``).
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthError
from auth.jwt import TokenClaims, TokenService

_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session from the app's pool for route handlers."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Extract and verify the Bearer token, returning the authenticated
    identity claims.
    """
    if credentials is None:
        raise AuthError("Missing Bearer token")
    return tokens.verify_token(credentials.credentials)
