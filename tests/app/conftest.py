from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from userhub.app.app import app
from userhub.app.dependencies import get_user_store, get_export_service
from userhub.app.constants import SESSION_IDENTITY_KEY
from userhub.services import ExportService

from tests._factories import InMemoryUserStore, UserFactory, make_session_cookie


@pytest.fixture
def store(user_factory: UserFactory) -> InMemoryUserStore:
    """A user store seeded with the default test user."""
    return InMemoryUserStore([user_factory.make()])


@pytest.fixture
def export_dir(tmp_path):
    path = tmp_path / "exports"
    path.mkdir()
    return path


@pytest.fixture
def client(store: InMemoryUserStore, export_dir) -> Iterator[TestClient]:
    """Test client with the in-memory store and a temporary export directory."""
    app.dependency_overrides[get_user_store] = lambda: store
    app.dependency_overrides[get_export_service] = lambda: ExportService(export_dir)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user_client(client: TestClient, make_token) -> TestClient:
    """Client carrying a bearer token for the seeded user (role 'user')."""
    client.headers["Authorization"] = f"Bearer {make_token(role='user')}"
    return client


@pytest.fixture
def admin_client(client: TestClient, make_token) -> TestClient:
    """Client carrying a bearer token with the 'admin' role."""
    client.headers["Authorization"] = f"Bearer {make_token(role='admin')}"
    return client


@pytest.fixture
def sign_in(client: TestClient):
    """Give the client a signed-in session for an identity with `role`."""

    def _sign_in(
        role: str = "user", user_id: str = "11111111-1111-1111-1111-111111111111"
    ) -> TestClient:
        cookie = make_session_cookie(
            {SESSION_IDENTITY_KEY: {"id": user_id, "role": role}}
        )
        client.cookies.set("session", cookie)
        return client

    return _sign_in
