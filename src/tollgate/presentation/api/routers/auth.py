"""Authentication router for signup, sign-in and sign-out."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tollgate.presentation.api.cookies import SessionCookieManager
from tollgate.presentation.api.dependencies import (
    AuthService,
    CookieManager,
    CurrentClaims,
    DBSession,
    SettingsDep,
)
from tollgate.presentation.api.exception_handlers import error_response_for
from tollgate.presentation.api.schemas.auth import (
    IdentityResponse,
    MessageResponse,
    SessionResponse,
)
from tollgate_config.settings import Settings
from tollgate_identity import AuthErrorKind, AuthResult

logger = logging.getLogger(__name__)

router = APIRouter()

JSONBody = Annotated[Any, Body()]


async def _finish(
    result: AuthResult,
    response: Response,
    session: AsyncSession,
    settings: Settings,
    cookies: SessionCookieManager,
    failure_kind: AuthErrorKind,
) -> IdentityResponse | JSONResponse:
    """Commit or roll back, then deliver the token cookie or the error."""
    if not result.ok:
        await session.rollback()
        return error_response_for(result)

    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Commit failed")
        return error_response_for(
            AuthResult.failure(failure_kind, f"Commit failed: {type(e).__name__}"),
        )

    cookies.set(response, settings.session_cookie_name, result.token)
    return IdentityResponse.from_projection(result.identity)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=IdentityResponse,
    summary="Register a new identity",
    responses={
        201: {"description": "Identity registered, session cookie set"},
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
        500: {"description": "User creation failed"},
    },
)
async def signup(
    payload: JSONBody,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
    cookies: CookieManager,
) -> IdentityResponse | JSONResponse:
    """
    Register with name, email, password and optional role.

    The session token is delivered as an HttpOnly cookie.
    """
    result = await auth_service.signup(payload)
    return await _finish(
        result,
        response,
        session,
        settings,
        cookies,
        AuthErrorKind.USER_CREATION_FAILED,
    )


@router.post(
    "/signin",
    response_model=IdentityResponse,
    summary="Authenticate an identity",
    responses={
        200: {"description": "Signed in, session cookie set"},
        400: {"description": "Invalid input"},
        401: {"description": "Invalid credentials"},
        500: {"description": "Sign-in failed"},
    },
)
async def signin(
    payload: JSONBody,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
    cookies: CookieManager,
) -> IdentityResponse | JSONResponse:
    """
    Authenticate with email and password.

    A fresh session token is delivered as an HttpOnly cookie.
    """
    result = await auth_service.signin(payload)
    return await _finish(
        result,
        response,
        session,
        settings,
        cookies,
        AuthErrorKind.AUTHENTICATION_FAILED,
    )


@router.post(
    "/signout",
    summary="Sign out",
    responses={200: {"description": "Session cookie cleared"}},
)
async def signout(
    response: Response,
    settings: SettingsDep,
    cookies: CookieManager,
) -> MessageResponse:
    """Clear the session cookie.

    The token itself stays valid until it expires; there is no
    server-side revocation.
    """
    cookies.clear(response, settings.session_cookie_name)
    logger.info("User signed out (session cookie cleared)")
    return MessageResponse(message="User signed out successfully")


@router.get(
    "/me",
    summary="Get the current session",
    responses={
        200: {"description": "Claims of the current session token"},
        401: {"description": "Missing, invalid or expired session token"},
    },
)
async def get_me(claims: CurrentClaims) -> SessionResponse:
    """Return the identity claims carried by the session cookie."""
    return SessionResponse.from_claims(claims)
