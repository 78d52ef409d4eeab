"""Domain errors raised by the store and auth layers."""


class BookshelfError(Exception):
    """Base class for bookshelf errors."""


class BookNotFoundError(BookshelfError):
    """No book exists with the given id, or the id is malformed."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book {book_id!r} not found")
        self.book_id = book_id


class DuplicateCodeError(BookshelfError):
    """Another book already holds the given code."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Book code {code!r} already exists")
        self.code = code


class InvalidCredentialsError(BookshelfError):
    """Username/password pair was rejected."""


class InvalidSessionError(BookshelfError):
    """Session token is missing, tampered with or expired."""


class StoreError(BookshelfError):
    """The backing store failed."""
