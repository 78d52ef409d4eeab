"""Credential verification."""

import secrets
from abc import ABC, abstractmethod

from fastapi import Request

from bookshelf.core.errors import InvalidCredentialsError


class CredentialVerifier(ABC):
    """Abstract base class for username/password checks."""

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        """
        Check a username/password pair.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            True if the pair is accepted
        """
        pass

    def authenticate(self, username: str, password: str) -> None:
        """Raise InvalidCredentialsError unless the pair is accepted."""
        if not self.verify(username, password):
            raise InvalidCredentialsError(f"Rejected credentials for {username!r}")


class StaticCredentialVerifier(CredentialVerifier):
    """Accepts a single configured username/password pair."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    def verify(self, username: str, password: str) -> bool:
        # Evaluate both comparisons so timing does not reveal which one failed
        username_ok = secrets.compare_digest(username.encode(), self._username.encode())
        password_ok = secrets.compare_digest(password.encode(), self._password.encode())
        return username_ok and password_ok


def get_credential_verifier(request: Request) -> CredentialVerifier:
    """Get the credential verifier attached to the running application."""
    return request.app.state.credential_verifier
