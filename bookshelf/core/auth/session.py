"""Signed, expiring session tokens."""

import time
from typing import Any

import structlog
from authlib.jose import JoseError, jwt
from fastapi import Request

from bookshelf.core.errors import InvalidSessionError

logger = structlog.get_logger(__name__)

SESSION_ALGORITHM = "HS256"


class SessionManager:
    """Issues and verifies HS256 session tokens."""

    def __init__(self, secret: str, ttl: int = 86400, issuer: str = "bookshelf") -> None:
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._issuer = issuer

    @property
    def ttl(self) -> int:
        return self._ttl

    def issue(self, subject: str) -> str:
        """Create a session token for ``subject``."""
        now = int(time.time())
        payload = {
            "iss": self._issuer,
            "sub": subject,
            "iat": now,
            "exp": now + self._ttl,
        }
        header = {"alg": SESSION_ALGORITHM, "typ": "JWT"}
        token = jwt.encode(header, payload, self._secret)
        # authlib returns bytes
        return token.decode() if isinstance(token, bytes) else token

    def verify(self, token: str | None) -> dict[str, Any]:
        """
        Verify a session token and return its claims.

        Raises:
            InvalidSessionError: if the token is missing, badly signed,
                issued by someone else or expired.
        """
        if not token:
            raise InvalidSessionError("Missing session token")

        claims_options = {
            "iss": {"essential": True, "value": self._issuer},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }
        try:
            claims = jwt.decode(token, self._secret, claims_options=claims_options)
            claims.validate()
        except (JoseError, ValueError) as e:
            logger.debug("Session token rejected", error=str(e))
            raise InvalidSessionError(str(e)) from e

        return dict(claims)


def get_session_manager(request: Request) -> SessionManager:
    """Get the session manager attached to the running application."""
    return request.app.state.session_manager
