"""Book API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from bookshelf.api.deps import require_session
from bookshelf.api.schemas.books import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    MessageResponse,
)
from bookshelf.core.books.store import BookStore, get_book_store
from bookshelf.core.errors import BookNotFoundError, DuplicateCodeError

router = APIRouter(prefix="/api/books", tags=["Books"])

BOOK_NOT_FOUND_MESSAGE = "Buku tidak ditemukan"
DUPLICATE_CODE_MESSAGE = "Kode buku sudah terdaftar"
BOOK_DELETED_MESSAGE = "Buku berhasil dihapus"


@router.get("", response_model=BookListResponse)
async def list_books(
    store: Annotated[BookStore, Depends(get_book_store)],
) -> BookListResponse:
    """List all books."""
    return BookListResponse(data=await store.list_all())


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_session)],
)
async def create_book(
    request: BookCreate,
    store: Annotated[BookStore, Depends(get_book_store)],
) -> BookResponse:
    """
    Add a new book.

    The book code must not be used by any other book.
    """
    try:
        book = await store.create(request)
    except DuplicateCodeError:
        raise HTTPException(status_code=400, detail=DUPLICATE_CODE_MESSAGE)
    return BookResponse(data=book)


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(
    book_id: str,
    store: Annotated[BookStore, Depends(get_book_store)],
) -> BookResponse:
    """Get a book by ID."""
    try:
        book = await store.get_by_id(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND_MESSAGE)
    return BookResponse(data=book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    dependencies=[Depends(require_session)],
)
async def update_book(
    book_id: str,
    request: BookUpdate,
    store: Annotated[BookStore, Depends(get_book_store)],
) -> BookResponse:
    """Replace the provided fields of a book."""
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    try:
        book = await store.update(book_id, changes)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND_MESSAGE)
    except DuplicateCodeError:
        raise HTTPException(status_code=400, detail=DUPLICATE_CODE_MESSAGE)
    return BookResponse(data=book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_session)],
)
async def delete_book(
    book_id: str,
    store: Annotated[BookStore, Depends(get_book_store)],
) -> MessageResponse:
    """Delete a book."""
    try:
        await store.delete(book_id)
    except BookNotFoundError:
        raise HTTPException(status_code=404, detail=BOOK_NOT_FOUND_MESSAGE)
    return MessageResponse(message=BOOK_DELETED_MESSAGE)
