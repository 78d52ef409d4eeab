"""Authentication module."""

from bookshelf.core.auth.credentials import (
    CredentialVerifier,
    StaticCredentialVerifier,
    get_credential_verifier,
)
from bookshelf.core.auth.session import SessionManager, get_session_manager

__all__ = [
    "CredentialVerifier",
    "StaticCredentialVerifier",
    "get_credential_verifier",
    "SessionManager",
    "get_session_manager",
]
