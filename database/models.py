"""
SQLAlchemy ORM models for the credential store.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import DeclarativeBase

# Largest value the INTEGER primary key holds on every supported store.
MAX_USER_ID = 2**31 - 1


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "tbl_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(255), nullable=False)
    fullname = Column(String(255))
    lastname = Column(String(255))
    username = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    status = Column(String(64), nullable=False, default="user")

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
