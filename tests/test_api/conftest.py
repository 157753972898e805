"""
API fixtures: app on the in-memory database + signed-in clients
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.fixture
def app(session_factory):
    return create_app(session_factory=session_factory)


def _register(client: TestClient, email: str, password: str = "secret123", full_name: str = ""):
    resp = client.post(
        "/auth/register",
        data={"email": email, "password": password, "full_name": full_name},
        follow_redirects=False,
    )
    assert resp.status_code == 302
    return client


@pytest.fixture
def anon_client(app):
    return TestClient(app)


@pytest.fixture
def client(app):
    """Залогиненный пользователь owner@example.com"""
    return _register(TestClient(app), "owner@example.com", full_name="Olivia Owner")


@pytest.fixture
def other_client(app):
    return _register(TestClient(app), "other@example.com")
