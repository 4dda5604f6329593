"""Tollgate HTTP application.

``create_app`` builds the FastAPI instance: auth routes under ``/api/v1/auth``,
an unversioned ``/health`` check, CORS and the error handlers. Serve it with
``python -m tollgate`` or ``uvicorn --factory tollgate.presentation.api.app:create_app``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from tollgate.infrastructure.persistence.sqlalchemy.models import Base
from tollgate.presentation.api.dependencies import (
    build_engine,
    build_session_maker,
)
from tollgate.presentation.api.exception_handlers import setup_exception_handlers
from tollgate.presentation.api.routers import auth_router
from tollgate_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_PACKAGES = ("tollgate", "tollgate_auth", "tollgate_identity")
NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx")

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": (
            "Signup, sign-in and sign-out. Successful signup and sign-in set "
            "an HttpOnly, SameSite=Strict `token` cookie holding a one-day "
            "HS256 session token. Sign-out only clears the cookie."
        ),
    },
    {"name": "Health", "description": "Liveness check."},
]


@lru_cache(maxsize=1)
def _configure_logging(level_name: str) -> None:
    """Route all records to stdout once per process.

    Our own packages log at ``level_name``; database and HTTP client
    libraries are held at WARNING.
    """
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in LOG_PACKAGES:
        logging.getLogger(name).setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


async def _ensure_schema(engine: AsyncEngine) -> None:
    """Create missing tables; exit if the database cannot be reached."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as e:
        logger.critical("Database unavailable at startup: %s", type(e).__name__)
        raise SystemExit(1) from None
    logger.info("Identity schema ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the engine named by the app's settings and create missing tables."""
    engine = build_engine(app.state.settings)
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)
    logger.info("Tollgate API %s starting", API_VERSION)
    await _ensure_schema(engine)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Tollgate API stopped, connection pool disposed")


def create_v1_router() -> APIRouter:
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    settings
        Settings to run with. When omitted, the cached environment-derived
        settings are used. Routes, the engine and startup schema creation
        all read the instance kept on ``app.state.settings``.

    Returns
    -------
    The configured application. Startup creates missing tables.
    """
    app_settings = settings if settings is not None else get_settings()
    _configure_logging(app_settings.log_level)

    if app_settings.uses_insecure_jwt_secret:
        logger.warning(
            "Session tokens are signed with the built-in development secret; "
            "set JWT_SECRET_KEY before exposing this service",
        )

    docs_enabled = app_settings.api_debug
    app = FastAPI(
        title=f"{app_settings.app_name} API",
        description="Signup, sign-in and cookie-based sessions.",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    setup_exception_handlers(app)
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        return {"status": "healthy", "version": API_VERSION}

    return app
