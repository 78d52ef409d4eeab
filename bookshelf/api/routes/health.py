"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from bookshelf.config import Settings, get_settings
from bookshelf.core.books.store import BookStore, get_book_store

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(
    store: Annotated[BookStore, Depends(get_book_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Readiness check - verifies the book store answers."""
    if not await store.ping():
        raise HTTPException(status_code=503, detail="Store unavailable")
    return {
        "status": "ready",
        "store": "connected",
        "auth_required": settings.auth_required,
    }


@router.get("/health/live")
async def liveness_check() -> dict:
    """Liveness check - verifies service is running."""
    return {"status": "alive"}
