"""Redis-backed book storage."""

import re
import uuid
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as redis
import structlog
from fastapi import Request
from redis.exceptions import RedisError, WatchError

from bookshelf.api.schemas.books import Book, BookCreate
from bookshelf.core.errors import BookNotFoundError, DuplicateCodeError, StoreError

logger = structlog.get_logger(__name__)

# Same shape as a document-database object id: 12 bytes, hex encoded.
BOOK_ID_PATTERN = re.compile(r"[0-9a-f]{24}")

UPDATABLE_FIELDS = frozenset({"title", "code", "author", "year"})

# Optimistic transactions retried this many times on WATCH conflicts
MAX_TRANSACTION_ATTEMPTS = 5

GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def new_book_id() -> str:
    """Generate a fresh book identifier."""
    return uuid.uuid4().hex[:24]


def is_valid_book_id(book_id: str) -> bool:
    """Check that a book id is syntactically valid."""
    return BOOK_ID_PATTERN.fullmatch(book_id) is not None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _escape_glob(value: str) -> str:
    """Escape Redis glob metacharacters so ``value`` matches literally."""
    return GLOB_SPECIAL.sub(r"\\\1", value)


class BookStore:
    """
    Book collection stored as JSON documents in Redis.

    Key layout under ``prefix``:

    - ``<prefix>:book:<id>``: the book document
    - ``<prefix>:books``: sorted set of ids, scored by insertion order
    - ``<prefix>:books:seq``: insertion counter
    - ``<prefix>:code:<code>``: id of the book holding ``code``

    Code keys act as a unique index. They change only inside WATCH/MULTI
    transactions together with the book document, so two books can never
    share a code and a code is taken only while a book holds it.

    The client must be created with ``decode_responses=True``.
    """

    def __init__(self, client: redis.Redis, prefix: str = "bookshelf") -> None:
        self._client = client
        self._prefix = prefix

    def _book_key(self, book_id: str) -> str:
        return f"{self._prefix}:book:{book_id}"

    def _code_key(self, code: str) -> str:
        return f"{self._prefix}:code:{code}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}:books"

    @property
    def _seq_key(self) -> str:
        return f"{self._prefix}:books:seq"

    async def ping(self) -> bool:
        """Check that the backing store answers."""
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Store ping failed", error=str(e))
            return False

    async def list_all(self) -> list[Book]:
        """List all books in insertion order."""
        try:
            ids = await self._client.zrange(self._index_key, 0, -1)
            if not ids:
                return []
            docs = await self._client.mget([self._book_key(book_id) for book_id in ids])
        except RedisError as e:
            raise StoreError("Failed to list books") from e

        return [Book.model_validate_json(doc) for doc in docs if doc is not None]

    async def find_by_code(self, code: str) -> Book | None:
        """Get the book holding a code, if any."""
        try:
            book_id = await self._client.get(self._code_key(code))
        except RedisError as e:
            raise StoreError("Failed to look up book code") from e

        if book_id is None:
            return None
        try:
            return await self.get_by_id(book_id)
        except BookNotFoundError:
            return None

    async def create(self, data: BookCreate) -> Book:
        """
        Add a book to the store.

        The code reservation and the document write commit in one
        transaction, so a failed write never leaves the code taken.

        Raises:
            DuplicateCodeError: if another book already holds ``data.code``.
                The store is left untouched in that case.
        """
        now = _utcnow()
        book = Book(id=new_book_id(), created_at=now, updated_at=now, **data.model_dump())
        code_key = self._code_key(book.code)

        for _ in range(MAX_TRANSACTION_ATTEMPTS):
            try:
                async with self._client.pipeline(transaction=True) as pipe:
                    await pipe.watch(code_key)
                    if await pipe.exists(code_key):
                        raise DuplicateCodeError(book.code)
                    # A gap in the sequence after a failed commit is harmless
                    seq = await pipe.incr(self._seq_key)

                    pipe.multi()
                    pipe.set(code_key, book.id)
                    pipe.set(self._book_key(book.id), book.model_dump_json())
                    pipe.zadd(self._index_key, {book.id: seq})
                    await pipe.execute()
                break
            except WatchError:
                continue
            except RedisError as e:
                raise StoreError("Failed to create book") from e
        else:
            raise StoreError("Failed to create book: transaction kept conflicting")

        logger.info("Book created", book_id=book.id, code=book.code)
        return book

    async def get_by_id(self, book_id: str) -> Book:
        """
        Get a book by ID.

        Raises:
            BookNotFoundError: if no book has this id or the id is malformed.
        """
        if not is_valid_book_id(book_id):
            raise BookNotFoundError(book_id)

        try:
            doc = await self._client.get(self._book_key(book_id))
        except RedisError as e:
            raise StoreError("Failed to fetch book") from e

        if doc is None:
            raise BookNotFoundError(book_id)
        return Book.model_validate_json(doc)

    async def update(self, book_id: str, changes: dict[str, Any]) -> Book:
        """
        Replace the given fields of a book. The id never changes.

        Raises:
            BookNotFoundError: if no book has this id or the id is malformed.
            DuplicateCodeError: if ``changes`` moves the book to a code
                another book already holds.
        """
        if not is_valid_book_id(book_id):
            raise BookNotFoundError(book_id)

        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        book_key = self._book_key(book_id)
        watched = [book_key]
        if "code" in changes:
            watched.append(self._code_key(changes["code"]))

        for _ in range(MAX_TRANSACTION_ATTEMPTS):
            try:
                async with self._client.pipeline(transaction=True) as pipe:
                    await pipe.watch(*watched)
                    doc = await pipe.get(book_key)
                    if doc is None:
                        raise BookNotFoundError(book_id)
                    book = Book.model_validate_json(doc)
                    if not changes:
                        return book

                    updated = book.model_copy(update={**changes, "updated_at": _utcnow()})
                    code_changed = updated.code != book.code
                    if code_changed and await pipe.exists(self._code_key(updated.code)):
                        raise DuplicateCodeError(updated.code)

                    pipe.multi()
                    pipe.set(book_key, updated.model_dump_json())
                    if code_changed:
                        pipe.set(self._code_key(updated.code), book_id)
                        pipe.delete(self._code_key(book.code))
                    await pipe.execute()
                break
            except WatchError:
                continue
            except RedisError as e:
                raise StoreError("Failed to update book") from e
        else:
            raise StoreError("Failed to update book: transaction kept conflicting")

        logger.info("Book updated", book_id=book_id, fields=sorted(changes))
        return updated

    async def delete(self, book_id: str) -> None:
        """
        Delete a book and free its code in one transaction.

        Raises:
            BookNotFoundError: if no book has this id or the id is malformed.
        """
        if not is_valid_book_id(book_id):
            raise BookNotFoundError(book_id)

        book_key = self._book_key(book_id)
        for _ in range(MAX_TRANSACTION_ATTEMPTS):
            try:
                async with self._client.pipeline(transaction=True) as pipe:
                    await pipe.watch(book_key)
                    doc = await pipe.get(book_key)
                    if doc is None:
                        raise BookNotFoundError(book_id)
                    book = Book.model_validate_json(doc)

                    pipe.multi()
                    pipe.delete(book_key)
                    pipe.zrem(self._index_key, book_id)
                    pipe.delete(self._code_key(book.code))
                    await pipe.execute()
                break
            except WatchError:
                continue
            except RedisError as e:
                raise StoreError("Failed to delete book") from e
        else:
            raise StoreError("Failed to delete book: transaction kept conflicting")

        logger.info("Book deleted", book_id=book_id, code=book.code)

    async def clear(self) -> int:
        """Delete every book. Returns the number of books removed."""
        pattern = f"{_escape_glob(self._prefix)}:*"
        try:
            count = await self._client.zcard(self._index_key)
            keys = [key async for key in self._client.scan_iter(match=pattern)]
            if keys:
                await self._client.delete(*keys)
        except RedisError as e:
            raise StoreError("Failed to clear books") from e

        logger.info("Store cleared", deleted_books=count)
        return count


def get_book_store(request: Request) -> BookStore:
    """Get the book store attached to the running application."""
    return request.app.state.book_store
