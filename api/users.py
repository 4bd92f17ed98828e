"""
User API routes: registration and token-protected CRUD.

Route prefix: /users
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
    store_errors,
)
from auth.dependencies import db_session, get_current_user
from auth.jwt import TokenClaims
from auth.password import hash_password_async
from database import users as users_store
from database.models import MAX_USER_ID
from utils.schemas import (
    CreateUserRequest,
    CreateUserResponse,
    MessageResponse,
    UpdateUserRequest,
    UserOut,
)
from utils.validators import is_blank, require_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


async def _hash_or_fail(password: str, action: str) -> str:
    try:
        return await hash_password_async(password)
    except (ValueError, TypeError) as exc:
        logger.exception("%s: password hashing failed", action)
        raise InternalError(action, details=str(exc)) from exc


def _check_user_id(user_id: int) -> None:
    """Ids outside the ``id`` column's range can never match a row."""
    if not 0 < user_id <= MAX_USER_ID:
        raise NotFoundError("User not found")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateUserResponse)
async def create_user(
    req: CreateUserRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    action = "Create user failed"
    require_fields(
        req, "firstname", "username", "password",
        message="Firstname, username, and password are required.",
    )
    if is_blank(req.password):
        raise ValidationError("Password must be a non-empty string.")

    with store_errors(action):
        taken = await users_store.username_taken(session, req.username)
    if taken:
        raise ConflictError("Username already exists.")

    password_hash = await _hash_or_fail(req.password, action)
    fullname = req.fullname or f"{req.firstname} {req.lastname or ''}".strip()
    user_status = req.status or "user"

    with store_errors(action):
        try:
            user = await users_store.create_user(
                session,
                firstname=req.firstname,
                fullname=fullname,
                lastname=req.lastname,
                username=req.username,
                password_hash=password_hash,
                status=user_status,
            )
            await session.commit()
        except IntegrityError as exc:
            # The unique index caught a concurrent registration.
            await session.rollback()
            raise ConflictError("Username already exists.") from exc

    logger.info("Registered user %s (%s)", user.username, user.id)

    return {
        "message": "User created successfully",
        "user": {
            "id": user.id,
            "username": user.username,
            "fullname": fullname,
            "status": user_status,
        },
    }


@router.get("", response_model=List[UserOut])
async def list_users(
    session: AsyncSession = Depends(db_session),
    current_user: TokenClaims = Depends(get_current_user),
) -> List[Any]:
    with store_errors("Query failed"):
        return await users_store.list_users(session)


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(db_session),
    current_user: TokenClaims = Depends(get_current_user),
) -> Any:
    _check_user_id(user_id)
    with store_errors("Query failed"):
        user = await users_store.get_user(session, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.put("/{user_id}", response_model=MessageResponse)
async def update_user(
    user_id: int,
    req: UpdateUserRequest,
    session: AsyncSession = Depends(db_session),
    current_user: TokenClaims = Depends(get_current_user),
) -> Dict[str, Any]:
    """
    Replace every field except ``id``. The password changes only when a
    non-blank one is supplied.
    """
    _check_user_id(user_id)
    action = "Update failed"
    require_fields(
        req, "firstname", "username",
        message="firstname and username are required",
    )

    with store_errors(action):
        taken = await users_store.username_taken(session, req.username, exclude_id=user_id)
    if taken:
        raise ConflictError("Username already taken")

    values: Dict[str, Any] = {
        "firstname": req.firstname,
        "fullname": req.fullname,
        "lastname": req.lastname,
        "username": req.username,
        "status": req.status or "user",
    }
    if not is_blank(req.password):
        values["password"] = await _hash_or_fail(req.password, action)

    with store_errors(action):
        try:
            matched = await users_store.update_user(session, user_id, values)
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError("Username already taken") from exc

    if matched == 0:
        raise NotFoundError("User not found")

    logger.info(
        "Updated user %s (password %s) by %s",
        user_id, "changed" if "password" in values else "kept", current_user.id,
    )
    return {"message": "User updated successfully"}


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    session: AsyncSession = Depends(db_session),
    current_user: TokenClaims = Depends(get_current_user),
) -> Dict[str, Any]:
    _check_user_id(user_id)
    with store_errors("Delete failed"):
        deleted = await users_store.delete_user(session, user_id)
        await session.commit()

    if deleted == 0:
        raise NotFoundError("User not found")

    logger.info("Deleted user %s by %s", user_id, current_user.id)
    return {"message": "User deleted successfully"}
