"""Request-scoped dependencies for the auth routes.

Everything a route needs is wired here: the app's settings, one
``AsyncSession`` per request from the app's engine, the hashing and token
services, the registration service, the cookie manager and the current
session's claims. Routes take them through the ``Annotated`` aliases
(``DBSession``, ``AuthService``, ``CookieManager``, ``CurrentClaims``,
``SettingsDep``).

The settings live on ``app.state.settings`` from ``create_app`` onwards; the
engine and session maker are placed on ``app.state`` by the lifespan.
"""

from pathlib import Path
from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tollgate.presentation.api.cookies import SessionCookieManager
from tollgate_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    TokenClaims,
)
from tollgate_config.settings import Settings
from tollgate_identity.application.services import RegistrationService
from tollgate_identity.infrastructure.persistence.sqlalchemy import (
    IdentityRepositorySQLAlchemy,
)


def get_api_settings(request: Request) -> Settings:
    """The settings the serving app was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_api_settings)]


def build_engine(settings: Settings) -> AsyncEngine:
    """An engine for the identity store named by ``settings``.

    A file-backed SQLite URL gets its parent directory created first.
    """
    url = make_url(settings.database_url)
    is_sqlite_file = url.get_backend_name() == "sqlite" and url.database not in (
        None,
        "",
        ":memory:",
    )
    if is_sqlite_file:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(url, pool_pre_ping=True)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """One session per request; the route decides commit or rollback."""
    async with request.app.state.session_maker() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Hashing, tokens and the registration service
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.password_hash_rounds)


def get_registration_service(
    session: DBSession,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
    password_service: Annotated[PasswordHashingService, Depends(get_password_service)],
) -> RegistrationService:
    """Signup and sign-in bound to the request's session."""
    return RegistrationService(
        identity_repository=IdentityRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


AuthService = Annotated[RegistrationService, Depends(get_registration_service)]


def get_cookie_manager(settings: SettingsDep) -> SessionCookieManager:
    return SessionCookieManager(settings)


CookieManager = Annotated[SessionCookieManager, Depends(get_cookie_manager)]


# -----------------------------------------------------------------------------
# Current Session (cookie-borne JWT)
# -----------------------------------------------------------------------------


async def get_current_claims(
    request: Request,
    settings: SettingsDep,
    cookies: CookieManager,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> TokenClaims:
    """
    FastAPI dependency to get the claims of the current session.

    Reads the session token from its cookie and verifies it. A missing,
    forged and expired token all end up as the same 401 response (see
    exception_handlers).

    Raises
    ------
    InvalidTokenError
        If the token is missing, invalid, or expired
    """
    token = cookies.get(request, settings.session_cookie_name)
    if token is None:
        msg = "No session cookie"
        raise InvalidTokenError(msg)

    return jwt_service.verify(token)


# Type alias for injected session claims
CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
