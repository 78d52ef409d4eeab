"""Pytest configuration and fixtures."""

import fakeredis
import pytest
from fastapi.testclient import TestClient

from bookshelf.config import Settings
from bookshelf.core.books.store import BookStore
from bookshelf.main import create_app


@pytest.fixture
def settings():
    """Settings isolated from the environment's .env file."""
    return Settings(
        _env_file=None,
        metrics_enabled=False,
        session_secret="test-secret",
        store_prefix="test",
    )


@pytest.fixture
def redis_server():
    """A private in-process Redis server."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def store(redis_client):
    """Book store on a private fake Redis."""
    return BookStore(redis_client, prefix="test")


@pytest.fixture
def client(settings, redis_client):
    """Create a test client for the FastAPI app."""
    app = create_app(settings, redis_client=redis_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    """Test client holding the cookies of a successful login."""
    response = client.post("/api/login", json={"username": "admin", "password": "password"})
    assert response.status_code == 200
    return client


@pytest.fixture
def sample_book():
    """Sample book payload."""
    return {
        "title": "Test Book",
        "code": "123",
        "author": "Author Test",
        "year": 2022,
    }
