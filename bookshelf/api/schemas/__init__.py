"""API schemas."""

from bookshelf.api.schemas.auth import LoginRequest, LoginResponse
from bookshelf.api.schemas.books import (
    Book,
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    MessageResponse,
)

__all__ = [
    "Book",
    "BookCreate",
    "BookListResponse",
    "BookResponse",
    "BookUpdate",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
]
