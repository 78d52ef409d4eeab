"""Login and logout endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response

from bookshelf.api.deps import AUTH_COOKIE, SESSION_COOKIE
from bookshelf.api.schemas.auth import LoginRequest, LoginResponse
from bookshelf.config import Settings, get_settings
from bookshelf.core.auth import (
    CredentialVerifier,
    SessionManager,
    get_credential_verifier,
    get_session_manager,
)
from bookshelf.core.errors import InvalidCredentialsError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

LOGIN_SUCCESS_MESSAGE = "Login berhasil"
LOGOUT_SUCCESS_MESSAGE = "Logout berhasil"
INVALID_CREDENTIALS_MESSAGE = "username atau password salah"


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    verifier: Annotated[CredentialVerifier, Depends(get_credential_verifier)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Log in with a username and password.

    On success sets the ``isAuthenticated`` flag cookie and a signed
    ``session`` cookie that mutating book routes require.
    """
    try:
        verifier.authenticate(request.username, request.password)
    except InvalidCredentialsError:
        logger.info("Login rejected", username=request.username)
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS_MESSAGE)

    token = sessions.issue(request.username)
    response.set_cookie(
        key=AUTH_COOKIE,
        value="true",
        max_age=sessions.ttl,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=sessions.ttl,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )

    logger.info("Login succeeded", username=request.username)
    return LoginResponse(message=LOGIN_SUCCESS_MESSAGE)


@router.post("/logout", response_model=LoginResponse)
async def logout(response: Response) -> LoginResponse:
    """Clear the login cookies."""
    response.delete_cookie(AUTH_COOKIE)
    response.delete_cookie(SESSION_COOKIE)
    return LoginResponse(message=LOGOUT_SUCCESS_MESSAGE)
