"""
Pydantic request / response schemas for the user API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════
#
# Fields are optional here so missing values reach the handlers' presence
# checks and come back as 400 with a readable message instead of a 422.


class CreateUserRequest(BaseModel):
    firstname: Optional[str] = None
    fullname: Optional[str] = None
    lastname: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    status: Optional[str] = None


class UpdateUserRequest(BaseModel):
    firstname: Optional[str] = None
    fullname: Optional[str] = None
    lastname: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    status: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public projection of a user row. Never carries the password."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str
    fullname: Optional[str] = None
    lastname: Optional[str] = None
    username: str
    status: str


class CreatedUser(BaseModel):
    id: int
    username: str
    fullname: Optional[str] = None
    status: str


class CreateUserResponse(BaseModel):
    message: str
    user: CreatedUser


class LoginUser(BaseModel):
    id: int
    fullname: Optional[str] = None


class LoginResponse(BaseModel):
    message: str
    token: str
    user: LoginUser


class MessageResponse(BaseModel):
    message: str
