"""FastAPI application entry point."""

import time
from contextlib import asynccontextmanager

import redis.asyncio as redis
import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.api.routes import auth_router, books_router, health_router
from bookshelf.config import Settings, get_settings
from bookshelf.core.auth import SessionManager, StaticCredentialVerifier
from bookshelf.core.books.store import BookStore
from bookshelf.core.errors import StoreError
from bookshelf.utils.logging import setup_logging

logger = structlog.get_logger(__name__)

VERSION = "1.0.0"

INVALID_REQUEST_MESSAGE = "Data tidak valid"
SERVER_ERROR_MESSAGE = "Terjadi kesalahan pada server"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(debug=settings.debug)

    client = app.state.redis_client
    owns_client = client is None
    if owns_client:
        client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    app.state.book_store = BookStore(client, prefix=settings.store_prefix)
    logger.info("Book store attached", prefix=settings.store_prefix, external=not owns_client)

    try:
        yield
    finally:
        if owns_client:
            await client.aclose()
            logger.info("Book store connection closed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"message": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/path validation failures in the message envelope."""
    return JSONResponse(
        status_code=422,
        content={
            "message": INVALID_REQUEST_MESSAGE,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Surface store failures as 500 without retrying."""
    logger.error(
        "Store failure",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        cause=repr(exc.__cause__),
    )
    return JSONResponse(status_code=500, content={"message": SERVER_ERROR_MESSAGE})


def create_app(
    settings: Settings | None = None,
    redis_client: redis.Redis | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        redis_client: Pre-built store client (``decode_responses=True``).
            When omitted, a client for ``settings.redis_url`` is opened at
            startup and closed at shutdown.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Book catalogue REST API with cookie-based login",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.redis_client = redis_client
    app.state.credential_verifier = StaticCredentialVerifier(
        settings.admin_username, settings.admin_password
    )
    app.state.session_manager = SessionManager(settings.session_secret, ttl=settings.session_ttl)
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StoreError, store_exception_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        processing_time_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Processing-Time-Ms"] = f"{processing_time_ms:.2f}"
        logger.info(
            "Request handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(processing_time_ms, 2),
        )
        return response

    # Prometheus metrics
    if settings.metrics_enabled:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(books_router)

    @app.get("/api")
    async def api_info():
        """API information endpoint."""
        return {
            "service": settings.app_name,
            "version": VERSION,
            "docs": "/docs",
            "openapi": "/openapi.json",
            "health": "/health",
            "books": "/api/books",
            "login": "/api/login",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
