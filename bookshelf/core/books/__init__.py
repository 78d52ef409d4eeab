"""Book management module."""

from bookshelf.core.books.store import BookStore, get_book_store, is_valid_book_id

__all__ = ["BookStore", "get_book_store", "is_valid_book_id"]
