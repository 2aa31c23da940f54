"""Tests for API middleware."""

from fastapi.testclient import TestClient


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/api/category/")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # uuid4 hex
        assert len(response.headers["X-Request-ID"]) == 32

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get("/api/category/", headers={"X-Request-ID": custom_id})
        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    def test_request_id_in_error_body(self, client: TestClient) -> None:
        """Error envelopes carry the request ID."""
        response = client.get("/api/category/missing", headers={"X-Request-ID": "req-42"})
        assert response.status_code == 404
        assert response.json()["request_id"] == "req-42"
        assert response.headers["X-Request-ID"] == "req-42"
