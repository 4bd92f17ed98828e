"""
Error taxonomy and the handlers that render it as JSON.

Handlers raise one of the ``ApiError`` subclasses; ``register_error_handlers``
turns them into ``{"error": ..., "details": ...}`` responses.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """
    Map store failures inside the block to ``InternalError(action)``.

    Covers driver-level errors that are not ``SQLAlchemyError`` (connection
    ``OSError``, parameter ``OverflowError``). ``ApiError`` passes through.
    """
    try:
        yield
    except ApiError:
        raise
    except (SQLAlchemyError, OSError, ArithmeticError, ValueError, TypeError) as exc:
        logger.exception("%s", action)
        raise InternalError(action, details=str(exc)) from exc


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        headers = None
        if isinstance(exc, AuthError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        err = ValidationError("Invalid request body", details=jsonable_encoder(exc.errors()))
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        err = InternalError("Internal server error", details=str(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_dict())
