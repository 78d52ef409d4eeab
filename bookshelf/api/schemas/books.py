"""Book schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookFields(BaseModel):
    """Client-writable fields of a book."""
    title: str = Field(..., min_length=1, description="Book title")
    code: str = Field(..., min_length=1, description="Unique book code")
    author: str = Field(..., min_length=1, description="Book author")
    year: int = Field(..., description="Publication year")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Laskar Pelangi",
                    "code": "LP-001",
                    "author": "Andrea Hirata",
                    "year": 2005,
                }
            ]
        }
    }


class BookCreate(BookFields):
    """Request to create a book."""


class BookUpdate(BaseModel):
    """Request to update a book. Only the provided fields are replaced."""
    title: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = None


class Book(BookFields):
    """A stored book."""
    id: str = Field(description="Store-assigned book identifier")
    created_at: datetime = Field(description="Creation time (UTC)")
    updated_at: datetime = Field(description="Last modification time (UTC)")


class BookResponse(BaseModel):
    """Envelope for a single book."""
    status: str = "success"
    data: Book


class BookListResponse(BaseModel):
    """Envelope for a list of books."""
    status: str = "success"
    data: list[Book]


class MessageResponse(BaseModel):
    """Plain message envelope."""
    message: str
