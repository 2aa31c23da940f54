"""Tests for domain value objects."""

import pytest

from app.domain import (
    CategoryDetails,
    ImagePayload,
    ProductDetails,
    UploadErrorKind,
    UploadFailure,
    UploadSuccess,
)
from app.domain.exceptions import CatalogValidationError


class TestImagePayload:
    """Tests for ImagePayload."""

    def test_batch_assigns_positions(self) -> None:
        """Positions follow submission order starting at one."""
        payloads = ImagePayload.batch(["a", "b", "c"])

        assert [p.position for p in payloads] == [1, 2, 3]
        assert [p.data for p in payloads] == ["a", "b", "c"]

    def test_repr_hides_data(self) -> None:
        """The encoded blob is not dumped into logs."""
        payload = ImagePayload(position=0, data="data:image/png;base64," + "A" * 1000)

        assert "AAAA" not in repr(payload)
        assert "position=0" in repr(payload)

    def test_is_immutable(self) -> None:
        """Payloads cannot be modified."""
        payload = ImagePayload(position=0, data="a")
        with pytest.raises(AttributeError):
            payload.position = 1  # type: ignore[misc]


class TestUploadResults:
    """Tests for UploadSuccess and UploadFailure."""

    def test_success_is_ok(self) -> None:
        """Successes report ok."""
        assert UploadSuccess(position=0, remote_url="https://cdn.test/a").ok

    def test_failure_is_not_ok(self) -> None:
        """Failures carry kind and cause."""
        failure = UploadFailure(position=2, error_kind=UploadErrorKind.NETWORK, cause="reset")

        assert not failure.ok
        assert failure.error_kind.value == "network"


class TestCategoryDetails:
    """Tests for CategoryDetails validation."""

    def test_valid(self) -> None:
        """Name and color are kept as given."""
        details = CategoryDetails(name="Pizza", color="#ff0000")
        assert details.name == "Pizza"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name: str) -> None:
        """Blank names are rejected."""
        with pytest.raises(CatalogValidationError) as exc_info:
            CategoryDetails(name=name)
        assert exc_info.value.field == "name"

    def test_long_color_rejected(self) -> None:
        """Colors longer than 50 characters are rejected."""
        with pytest.raises(CatalogValidationError) as exc_info:
            CategoryDetails(name="Pizza", color="x" * 51)
        assert exc_info.value.field == "color"


class TestProductDetails:
    """Tests for ProductDetails validation."""

    def make(self, **overrides) -> ProductDetails:
        fields = {"name": "Margherita", "description": "Classic", "category_id": "cat-1"}
        fields.update(overrides)
        return ProductDetails(**fields)

    def test_defaults(self) -> None:
        """Optional fields default to neutral values."""
        details = self.make()
        assert details.price == 0.0
        assert details.is_featured is False

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("price", -1.0),
            ("old_price", -0.01),
            ("num_reviews", -3),
            ("rating", 5.5),
            ("rating", -1.0),
            ("description", ""),
            ("category_id", " "),
        ],
    )
    def test_invalid_values_rejected(self, field: str, value) -> None:
        """Out-of-range or blank values name the offending field."""
        with pytest.raises(CatalogValidationError) as exc_info:
            self.make(**{field: value})
        assert exc_info.value.field == field
