"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import get_repository, get_storage_client
from app.catalog.repository import InMemoryCatalogRepository
from app.main import app


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    """Fresh catalog store for each test."""
    return InMemoryCatalogRepository()


@pytest.fixture
def storage(fake_storage):
    """Storage used by the app; replace its failures to simulate rejections."""
    return fake_storage


@pytest.fixture
def client(repository, storage) -> Iterator[TestClient]:
    """Create test client wired to the in-memory store and fake storage."""
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_storage_client] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def category(client: TestClient) -> dict:
    """A category created through the API."""
    response = client.post("/api/category/create", json={"name": "Pizza", "color": "#f00"})
    assert response.status_code == 201
    return response.json()
