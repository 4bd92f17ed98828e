"""
Auth API routes: login, logout.

Account creation lives with the user routes (``POST /users``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import AuthError, ValidationError, store_errors
from auth.dependencies import db_session, get_token_service
from auth.jwt import TokenService
from auth.password import verify_password_async
from database import users as users_store
from utils.schemas import LoginRequest, LoginResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Login with username + password."""
    if not req.username or not req.password:
        raise ValidationError("Username and password required")

    with store_errors("Login failed"):
        user = await users_store.get_by_username(session, req.username)

    if user is None:
        logger.warning("Login failed: unknown username %r", req.username)
        raise AuthError("User not found")

    if not await verify_password_async(req.password, user.password):
        logger.warning("Login failed: bad password for user %s", user.id)
        raise AuthError("Invalid password")

    token = tokens.create_token(user.id, user.username, user.fullname)
    logger.info("Login: %s (%s)", user.username, user.id)

    return {
        "message": "Login successful",
        "token": token,
        "user": {"id": user.id, "fullname": user.fullname},
    }


@router.post("/logout", response_model=MessageResponse)
async def logout() -> Dict[str, Any]:
    """Acknowledge only. Issued tokens stay valid until they expire."""
    return {"message": "Logged out"}
