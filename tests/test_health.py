"""Tests for health check endpoints."""


def test_health_check(client):
    """Test basic health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_liveness_check(client):
    """Test liveness endpoint."""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_readiness_check(client):
    """Test readiness endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["store"] == "connected"
    assert data["auth_required"] is True


def test_readiness_check_store_down(client, redis_server):
    """Readiness fails when the store does not answer."""
    redis_server.connected = False
    response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["message"] == "Store unavailable"


def test_api_info(client):
    """Test API info endpoint returns service info."""
    response = client.get("/api")
    assert response.status_code == 200
    data = response.json()
    assert "service" in data
    assert "version" in data
    assert data["books"] == "/api/books"


def test_unknown_route_uses_message_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_processing_time_header(client):
    response = client.get("/health")
    assert "X-Processing-Time-Ms" in response.headers
