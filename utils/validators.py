"""
Presence checks for request bodies.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from api.errors import ValidationError


def is_blank(value: Any) -> bool:
    """True for ``None`` and whitespace-only strings."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def require_fields(body: BaseModel, *names: str, message: str) -> None:
    """
    Raise ``ValidationError(message)`` unless every named field holds a
    non-empty string.
    """
    for name in names:
        value = getattr(body, name, None)
        if not isinstance(value, str) or value == "":
            raise ValidationError(message)
