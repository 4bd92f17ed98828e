"""
Password hashing and verification.

Uses bcrypt with automatic salting and a fixed work factor.
"""

from __future__ import annotations

import asyncio

import bcrypt

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 10)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError, AttributeError):
        return False


async def hash_password_async(password: str) -> str:
    """Run :func:`hash_password` in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)
