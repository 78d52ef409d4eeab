"""Tests for login, logout and session tokens."""

import pytest

from bookshelf.core.auth import SessionManager, StaticCredentialVerifier
from bookshelf.core.errors import InvalidCredentialsError, InvalidSessionError


def test_login_success(client):
    """Test login with the configured credentials."""
    response = client.post("/api/login", json={"username": "admin", "password": "password"})
    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Login berhasil"}
    assert response.cookies["isAuthenticated"] == "true"
    assert response.cookies["session"]


def test_login_session_cookie_is_http_only(client):
    response = client.post("/api/login", json={"username": "admin", "password": "password"})
    set_cookies = response.headers.get_list("set-cookie")
    session_cookie = next(c for c in set_cookies if c.startswith("session="))
    assert "HttpOnly" in session_cookie


@pytest.mark.parametrize(
    "username, password",
    [
        ("admin", "wrong"),
        ("root", "password"),
        ("", ""),
        ("Admin", "password"),
    ],
)
def test_login_invalid_credentials(client, username, password):
    response = client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 401
    assert response.json() == {"message": "username atau password salah"}
    assert "isAuthenticated" not in response.cookies


def test_login_missing_fields(client):
    response = client.post("/api/login", json={"username": "admin"})
    assert response.status_code == 422


def test_logout(auth_client):
    response = auth_client.post("/api/logout")
    assert response.status_code == 200
    assert response.json()["message"] == "Logout berhasil"
    assert "session" not in auth_client.cookies


def test_tampered_session_rejected(client):
    client.cookies.set("session", "not.a.token")
    response = client.post(
        "/api/books",
        json={"title": "T", "code": "1", "author": "A", "year": 2000},
    )
    assert response.status_code == 401


def test_custom_credentials(settings, redis_client):
    from fastapi.testclient import TestClient

    from bookshelf.main import create_app

    settings.admin_username = "librarian"
    settings.admin_password = "s3cret"
    with TestClient(create_app(settings, redis_client=redis_client)) as client:
        assert client.post(
            "/api/login", json={"username": "librarian", "password": "s3cret"}
        ).status_code == 200
        assert client.post(
            "/api/login", json={"username": "admin", "password": "password"}
        ).status_code == 401


class TestStaticCredentialVerifier:
    """Tests for the single-pair verifier."""

    def test_verify(self):
        verifier = StaticCredentialVerifier("admin", "password")
        assert verifier.verify("admin", "password")
        assert not verifier.verify("admin", "passwords")
        assert not verifier.verify("admin ", "password")

    def test_authenticate_raises(self):
        verifier = StaticCredentialVerifier("admin", "password")
        verifier.authenticate("admin", "password")
        with pytest.raises(InvalidCredentialsError):
            verifier.authenticate("admin", "nope")


class TestSessionManager:
    """Tests for signed session tokens."""

    def test_issue_and_verify(self):
        sessions = SessionManager("secret", ttl=60)
        claims = sessions.verify(sessions.issue("admin"))
        assert claims["sub"] == "admin"
        assert claims["exp"] - claims["iat"] == 60

    def test_expired_token(self):
        sessions = SessionManager("secret", ttl=-10)
        token = sessions.issue("admin")
        with pytest.raises(InvalidSessionError):
            sessions.verify(token)

    def test_wrong_secret(self):
        token = SessionManager("secret").issue("admin")
        with pytest.raises(InvalidSessionError):
            SessionManager("other-secret").verify(token)

    def test_wrong_issuer(self):
        token = SessionManager("secret", issuer="someone-else").issue("admin")
        with pytest.raises(InvalidSessionError):
            SessionManager("secret").verify(token)

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_missing_or_malformed(self, token):
        with pytest.raises(InvalidSessionError):
            SessionManager("secret").verify(token)

    def test_empty_secret(self):
        with pytest.raises(ValueError):
            SessionManager("")
