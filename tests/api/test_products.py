"""Tests for product API endpoints."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from app.catalog.repository import InMemoryCatalogRepository
from app.infrastructure.storage_client import StorageNetworkError


@pytest.fixture
def product_body(category: dict) -> dict:
    """Valid product create request."""
    return {
        "name": "Margherita",
        "description": "Tomato and mozzarella",
        "category_id": category["id"],
        "brand": "Luigi's",
        "price": 9.5,
        "old_price": 12.0,
        "rating": 4.5,
        "num_reviews": 10,
        "is_featured": True,
        "images": ["p1", "p2"],
    }


class TestCreateProduct:
    """Tests for POST /api/products/create."""

    def test_create_product(self, client: TestClient, product_body: dict) -> None:
        """Products are created with ordered image URLs."""
        response = client.post("/api/products/create", json=product_body)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["category_id"] == product_body["category_id"]
        assert data["images"] == ["https://cdn.test/p1", "https://cdn.test/p2"]
        assert data["is_featured"] is True

    def test_unknown_category_returns_404(
        self, client: TestClient, storage, product_body: dict
    ) -> None:
        """A product for a missing category is rejected before upload."""
        response = client.post(
            "/api/products/create",
            json={**product_body, "category_id": "missing"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"
        assert storage.calls == []

    def test_network_failure_returns_502(
        self, client: TestClient, storage, product_body: dict
    ) -> None:
        """Unreachable storage fails the request and stores nothing."""
        storage.failures = {"p2": StorageNetworkError("connection reset")}

        response = client.post("/api/products/create", json=product_body)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["context"]["error_kind"] == "network"
        assert client.get("/api/products/").json() == []

    def test_rating_out_of_range_rejected(self, client: TestClient, product_body: dict) -> None:
        """Request validation rejects ratings above 5."""
        response = client.post("/api/products/create", json={**product_body, "rating": 6})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestReadProducts:
    """Tests for GET /api/products."""

    def test_list_filters_by_category(
        self, client: TestClient, category: dict, product_body: dict
    ) -> None:
        """Products can be listed for one category."""
        other = client.post("/api/category/create", json={"name": "Drinks"}).json()
        client.post("/api/products/create", json=product_body)
        client.post(
            "/api/products/create",
            json={**product_body, "name": "Cola", "category_id": other["id"], "images": []},
        )

        everything = client.get("/api/products/").json()
        drinks = client.get("/api/products/", params={"category_id": other["id"]}).json()

        assert len(everything) == 2
        assert [p["name"] for p in drinks] == ["Cola"]

    def test_list_embeds_category(
        self, client: TestClient, category: dict, product_body: dict
    ) -> None:
        """Listed products carry their category; single reads do not."""
        created = client.post("/api/products/create", json=product_body).json()

        listed = client.get("/api/products/").json()

        assert listed[0]["category"]["id"] == category["id"]
        assert listed[0]["category"]["name"] == "Pizza"
        assert client.get(f"/api/products/{created['id']}").json()["category"] is None

    def test_list_omits_deleted_category(
        self, client: TestClient, category: dict, product_body: dict
    ) -> None:
        """A product whose category was deleted lists with no category."""
        client.post("/api/products/create", json=product_body)
        client.delete(f"/api/category/{category['id']}")

        listed = client.get("/api/products/").json()

        assert listed[0]["category"] is None

    def test_get_unknown_returns_404(self, client: TestClient) -> None:
        """Unknown product IDs return PRODUCT_NOT_FOUND."""
        response = client.get("/api/products/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestUpdateProduct:
    """Tests for PUT /api/products/{id}."""

    def test_update_with_empty_images_keeps_existing(
        self, client: TestClient, product_body: dict
    ) -> None:
        """An empty image list keeps the stored images."""
        created = client.post("/api/products/create", json=product_body).json()

        response = client.put(
            f"/api/products/{created['id']}",
            json={"price": 8.0, "images": []},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["price"] == 8.0
        assert data["images"] == created["images"]

    def test_update_replaces_images(self, client: TestClient, product_body: dict) -> None:
        """New images replace the stored ones."""
        created = client.post("/api/products/create", json=product_body).json()

        response = client.put(f"/api/products/{created['id']}", json={"images": ["p9"]})

        assert response.json()["images"] == ["https://cdn.test/p9"]


class TestDeleteProduct:
    """Tests for DELETE /api/products/{id}."""

    def test_delete(self, client: TestClient, product_body: dict) -> None:
        """Deleted products are gone."""
        created = client.post("/api/products/create", json=product_body).json()

        response = client.delete(f"/api/products/{created['id']}")

        assert response.json() == {"success": True, "message": "Product deleted"}
        assert client.get(f"/api/products/{created['id']}").status_code == 404


class FailingProductStore(InMemoryCatalogRepository):
    """Store whose product writes fail."""

    async def save_product(self, product):
        raise RuntimeError("write timeout")


class TestPersistenceFailure:
    """Tests for writes failing after upload."""

    @pytest.fixture
    def repository(self) -> InMemoryCatalogRepository:
        return FailingProductStore()

    def test_write_failure_reports_orphaned_urls(
        self, client: TestClient, product_body: dict
    ) -> None:
        """The error lists uploaded URLs that no record references."""
        response = client.post("/api/products/create", json=product_body)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["error_code"] == "PERSISTENCE_FAILED"
        assert data["context"]["orphaned_urls"] == [
            "https://cdn.test/p1",
            "https://cdn.test/p2",
        ]
