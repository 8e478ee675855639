"""
Shared fixtures: a fresh application per test with cheap bcrypt rounds.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, secret_key=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    """Register (if asked) and log in, returning an Authorization header dict."""

    def _login(username: str, password: str = "pw", register: bool = True) -> dict:
        if register:
            r = client.post("/register", json={"username": username, "password": password})
            assert r.status_code == 200
        r = client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _login
