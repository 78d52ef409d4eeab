"""FastAPI dependency implementations."""

from typing import Annotated, Any

import structlog
from fastapi import Cookie, Depends, HTTPException

from bookshelf.config import Settings, get_settings
from bookshelf.core.auth import SessionManager, get_session_manager
from bookshelf.core.errors import InvalidSessionError

logger = structlog.get_logger(__name__)

AUTH_COOKIE = "isAuthenticated"
SESSION_COOKIE = "session"

LOGIN_REQUIRED_MESSAGE = "Silakan login terlebih dahulu"


async def require_session(
    settings: Annotated[Settings, Depends(get_settings)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    session: Annotated[str | None, Cookie(alias=SESSION_COOKIE)] = None,
) -> dict[str, Any] | None:
    """Reject the request unless it carries a valid session cookie."""
    if not settings.auth_required:
        return None

    try:
        return sessions.verify(session)
    except InvalidSessionError as e:
        logger.info("Unauthenticated request rejected", reason=str(e))
        raise HTTPException(status_code=401, detail=LOGIN_REQUIRED_MESSAGE)
