"""
Shared fixtures: an app on in-memory SQLite with an in-memory token store.
"""

import pytest
from fastapi.testclient import TestClient

from admin_auth.api import create_app
from admin_auth.config import AuthSettings

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"
JWT_SECRET = "test-secret-key"


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret=JWT_SECRET,
        token_ttl=3600,
        database_url="sqlite:///:memory:",
        default_admin_username=ADMIN_USERNAME,
        default_admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def container(app):
    return app.state.container


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def login_token(client):
    """Log in through the API and return the bearer token."""
    def _login(username=ADMIN_USERNAME, password=ADMIN_PASSWORD):
        body = client.post("/auth/login", json={"username": username, "password": password}).json()
        assert body["code"] == 200, body
        return body["data"]["token"]
    return _login
