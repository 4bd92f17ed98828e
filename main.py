"""
User accounts service: application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from api.errors import register_error_handlers
from api.middleware import register_middleware
from api.users import router as users_router
from auth.jwt import TokenService
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, init_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Build the app with its collaborators injected.

    When no ``session_factory`` is given, an engine is built from
    ``settings`` and owned (created, initialised, disposed) by the app.
    """
    settings = settings or config
    owns_engine = session_factory is None and engine is None
    if session_factory is None:
        engine = engine or build_engine(settings)
        session_factory = build_session_factory(engine)

    app = FastAPI(
        title="User Accounts Service",
        version="1.0.0",
        description="Account registration, bearer-token login and user CRUD.",
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(
        settings.jwt_secret, expiry_seconds=settings.jwt_expiry_seconds,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(users_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return "Server is fully operational!"

    @app.on_event("startup")
    async def on_startup():
        if settings.uses_default_secret:
            logger.warning(
                "JWT_SECRET is not set; signing tokens with the built-in "
                "development secret"
            )
        if engine is not None and settings.db_create_tables:
            await init_db(engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        if owns_engine and engine is not None:
            await engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
