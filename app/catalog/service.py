"""Catalog service for category and product operations.

High-level service that combines repository operations with media
ingestion. Create and update requests follow one lifecycle:

    PENDING -> UPLOADING -> PERSISTED | ABORTED

Metadata is validated and referenced records are looked up before any
upload starts. A record is written only after its whole image batch
uploaded; any failure aborts the request without touching the store.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any, TypeVar

import structlog

from app.catalog.repository import CatalogRepository
from app.domain.entities import Category, IngestionRequest, Product
from app.domain.exceptions import CatalogError, PersistenceError, RecordNotFoundError
from app.domain.value_objects import CategoryDetails, ProductDetails
from app.ingestion.coordinator import BatchCoordinator

logger = structlog.get_logger()

R = TypeVar("R", Category, Product)


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(repository, coordinator, request_id="req-1")
        category = await service.create_category(
            {"name": "Pizza", "color": "#ff0000"},
            images=["data:image/png;base64,..."],
        )
    """

    def __init__(
        self,
        repository: CatalogRepository,
        coordinator: BatchCoordinator,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            repository: Catalog repository.
            coordinator: Batch upload coordinator.
            request_id: Request ID for correlation.
        """
        self.repository = repository
        self.coordinator = coordinator
        self.request_id = request_id
        self.last_ingestion: IngestionRequest | None = None

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    async def list_categories(self) -> list[Category]:
        """List all categories."""
        return await self.repository.list_categories()

    async def get_category(self, category_id: str) -> Category:
        """Get a category.

        Raises:
            RecordNotFoundError: If it does not exist.
        """
        category = await self.repository.get_category(category_id)
        if category is None:
            raise RecordNotFoundError("category", category_id)
        return category

    async def create_category(
        self,
        fields: Mapping[str, Any],
        images: Sequence[str],
    ) -> Category:
        """Upload images and create a category.

        Args:
            fields: Category fields (name, color).
            images: Encoded images in display order.

        Returns:
            Persisted category referencing the uploaded URLs.

        Raises:
            CatalogValidationError: If fields are invalid.
            StorageUploadError: If any image failed to upload.
            PersistenceError: If the write failed after uploading.
        """
        ingestion = self._begin("category", images)

        async def prepare() -> CategoryDetails:
            return CategoryDetails(**fields)

        details = await self._prepare(ingestion, prepare)
        urls = await self._upload(ingestion, images)
        category = Category.create(details, urls)
        return await self._persist(ingestion, category, urls, self.repository.save_category)

    async def update_category(
        self,
        category_id: str,
        fields: Mapping[str, Any],
        images: Sequence[str] | None = None,
    ) -> Category:
        """Update a category, replacing its images if new ones are given.

        Args:
            category_id: Category to update.
            fields: Fields to change; omitted fields keep their value.
            images: New images. None or empty keeps the current list.

        Returns:
            Updated category.

        Raises:
            RecordNotFoundError: If the category does not exist.
            CatalogValidationError: If the merged fields are invalid.
            StorageUploadError: If any image failed to upload.
            PersistenceError: If the write failed after uploading.
        """
        images = images or []
        ingestion = self._begin("category", images)

        async def prepare() -> tuple[Category, CategoryDetails]:
            existing = await self.get_category(category_id)
            return existing, replace(existing.details(), **fields)

        category, details = await self._prepare(ingestion, prepare)
        urls = await self._upload(ingestion, images)
        category.apply(details, urls)
        return await self._persist(ingestion, category, urls, self.repository.save_category)

    async def delete_category(self, category_id: str) -> None:
        """Delete a category.

        Raises:
            RecordNotFoundError: If it does not exist.
        """
        if not await self.repository.delete_category(category_id):
            raise RecordNotFoundError("category", category_id)
        logger.info("Category deleted", category_id=category_id, request_id=self.request_id)

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    async def list_products(self, category_id: str | None = None) -> list[Product]:
        """List products, optionally for one category."""
        return await self.repository.list_products(category_id)

    async def categories_for(self, products: Sequence[Product]) -> dict[str, Category]:
        """Look up the categories the given products belong to.

        Args:
            products: Products whose categories to load.

        Returns:
            Categories by ID; categories that no longer exist are omitted.
        """
        categories: dict[str, Category] = {}
        for category_id in dict.fromkeys(p.category_id for p in products):
            category = await self.repository.get_category(category_id)
            if category is not None:
                categories[category_id] = category
        return categories

    async def get_product(self, product_id: str) -> Product:
        """Get a product.

        Raises:
            RecordNotFoundError: If it does not exist.
        """
        product = await self.repository.get_product(product_id)
        if product is None:
            raise RecordNotFoundError("product", product_id)
        return product

    async def create_product(
        self,
        fields: Mapping[str, Any],
        images: Sequence[str],
    ) -> Product:
        """Upload images and create a product.

        Args:
            fields: Product fields; ``category_id`` must reference a category.
            images: Encoded images in display order.

        Returns:
            Persisted product referencing the uploaded URLs.

        Raises:
            CatalogValidationError: If fields are invalid.
            RecordNotFoundError: If the category does not exist.
            StorageUploadError: If any image failed to upload.
            PersistenceError: If the write failed after uploading.
        """
        ingestion = self._begin("product", images)

        async def prepare() -> ProductDetails:
            details = ProductDetails(**fields)
            await self.get_category(details.category_id)
            return details

        details = await self._prepare(ingestion, prepare)
        urls = await self._upload(ingestion, images)
        product = Product.create(details, urls)
        return await self._persist(ingestion, product, urls, self.repository.save_product)

    async def update_product(
        self,
        product_id: str,
        fields: Mapping[str, Any],
        images: Sequence[str] | None = None,
    ) -> Product:
        """Update a product, replacing its images if new ones are given.

        Args:
            product_id: Product to update.
            fields: Fields to change; omitted fields keep their value.
            images: New images. None or empty keeps the current list.

        Returns:
            Updated product.

        Raises:
            RecordNotFoundError: If the product or a new category does not exist.
            CatalogValidationError: If the merged fields are invalid.
            StorageUploadError: If any image failed to upload.
            PersistenceError: If the write failed after uploading.
        """
        images = images or []
        ingestion = self._begin("product", images)

        async def prepare() -> tuple[Product, ProductDetails]:
            existing = await self.get_product(product_id)
            details = replace(existing.details(), **fields)
            if details.category_id != existing.category_id:
                await self.get_category(details.category_id)
            return existing, details

        product, details = await self._prepare(ingestion, prepare)
        urls = await self._upload(ingestion, images)
        product.apply(details, urls)
        return await self._persist(ingestion, product, urls, self.repository.save_product)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Raises:
            RecordNotFoundError: If it does not exist.
        """
        if not await self.repository.delete_product(product_id):
            raise RecordNotFoundError("product", product_id)
        logger.info("Product deleted", product_id=product_id, request_id=self.request_id)

    # -------------------------------------------------------------------------
    # Ingestion lifecycle
    # -------------------------------------------------------------------------

    def _begin(self, entity_type: str, images: Sequence[str]) -> IngestionRequest:
        ingestion = IngestionRequest.start(entity_type, len(images), self.request_id)
        self.last_ingestion = ingestion
        return ingestion

    async def _prepare(
        self,
        ingestion: IngestionRequest,
        prepare: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run pre-upload checks, aborting the request if they fail."""
        try:
            return await prepare()
        except CatalogError as e:
            ingestion.abort(e.message)
            logger.info(
                "Catalog request rejected",
                entity_type=ingestion.entity_type,
                reason=e.message,
                request_id=self.request_id,
            )
            raise

    async def _upload(self, ingestion: IngestionRequest, images: Sequence[str]) -> list[str]:
        ingestion.begin_upload()
        if not images:
            return []

        result = await self.coordinator.upload_batch(images)
        failure = result.failure
        if failure is not None:
            ingestion.abort(f"upload failed at position {failure.position}")
            result.raise_for_failure()
        return result.urls

    async def _persist(
        self,
        ingestion: IngestionRequest,
        record: R,
        urls: list[str],
        save: Callable[[R], Awaitable[R]],
    ) -> R:
        try:
            saved = await save(record)
        except Exception as e:
            ingestion.abort(f"persistence failed: {e}")
            logger.error(
                "Catalog write failed after upload",
                entity_type=ingestion.entity_type,
                record_id=record.id,
                orphaned_urls=urls,
                error=str(e),
                request_id=self.request_id,
            )
            raise PersistenceError(ingestion.entity_type, e, orphaned_urls=urls) from e

        ingestion.mark_persisted(saved.id)
        logger.info(
            "Catalog record persisted",
            entity_type=ingestion.entity_type,
            record_id=saved.id,
            image_count=len(saved.images),
            request_id=self.request_id,
        )
        return saved
