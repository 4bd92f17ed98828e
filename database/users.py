"""
Credential store queries for ``tbl_users``.

Every function takes the request's ``AsyncSession``; callers own the
commit so one handler's writes land together.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)


async def get_by_username(session: AsyncSession, username: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.username == username)
    )
    return result.scalar_one_or_none()


async def username_taken(
    session: AsyncSession,
    username: str,
    exclude_id: Optional[int] = None,
) -> bool:
    """True if a row other than ``exclude_id`` uses ``username``."""
    stmt = select(User.id).where(User.username == username)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    result = await session.execute(stmt.limit(1))
    return result.first() is not None


async def create_user(
    session: AsyncSession,
    *,
    firstname: str,
    fullname: Optional[str],
    lastname: Optional[str],
    username: str,
    password_hash: str,
    status: str,
) -> User:
    """Insert a row and flush so the store assigns ``id``."""
    user = User(
        firstname=firstname,
        fullname=fullname,
        lastname=lastname,
        username=username,
        password=password_hash,
        status=status,
    )
    session.add(user)
    await session.flush()
    return user


async def list_users(session: AsyncSession) -> List[User]:
    result = await session.execute(select(User))
    return list(result.scalars().all())


async def get_user(session: AsyncSession, user_id: int) -> Optional[User]:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def update_user(
    session: AsyncSession,
    user_id: int,
    values: Dict[str, Any],
) -> int:
    """Apply ``values`` to one row. Returns the number of rows matched."""
    result = await session.execute(
        update(User)
        .where(User.id == user_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


async def delete_user(session: AsyncSession, user_id: int) -> int:
    result = await session.execute(
        delete(User)
        .where(User.id == user_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount
