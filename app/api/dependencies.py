"""FastAPI dependencies for the catalog API.

Builds the catalog service for a request: repository (in-memory or SQL),
object storage client and batch coordinator.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from app.catalog.repository import (
    CatalogRepository,
    SqlCatalogRepository,
    get_memory_repository,
)
from app.catalog.service import CatalogService
from app.infrastructure.config import settings
from app.infrastructure.database import get_session_factory
from app.infrastructure.storage_client import (
    CloudinaryCredentials,
    CloudinaryStorageClient,
    StorageClient,
)
from app.ingestion.coordinator import BatchCoordinator, UploadConfig

# Global storage client instance
_storage_client: CloudinaryStorageClient | None = None


def get_credentials() -> CloudinaryCredentials:
    """Build object storage credentials from settings."""
    return CloudinaryCredentials(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        base_url=settings.cloudinary_base_url,
    )


def get_upload_config() -> UploadConfig:
    """Build upload configuration from settings."""
    return UploadConfig(
        capacity=settings.upload_concurrency,
        credentials=get_credentials(),
        timeout=settings.upload_timeout_seconds,
    )


def get_storage_client() -> StorageClient:
    """Get object storage client singleton."""
    global _storage_client
    if _storage_client is None:
        _storage_client = CloudinaryStorageClient(
            get_credentials(),
            timeout=settings.upload_timeout_seconds,
            folder=settings.cloudinary_folder,
        )
    return _storage_client


async def close_storage_client() -> None:
    """Close the storage client singleton if it was created."""
    global _storage_client
    if _storage_client is not None:
        await _storage_client.close()
        _storage_client = None


async def get_repository() -> AsyncGenerator[CatalogRepository, None]:
    """Get catalog repository for the configured backend.

    Yields:
        Repository. SQL writes commit inside the repository; the session
        is rolled back if the handler raises and closed afterwards.
    """
    if settings.catalog_backend != "sql":
        yield get_memory_repository()
        return

    async with get_session_factory()() as session:
        try:
            yield SqlCatalogRepository(session)
        except Exception:
            await session.rollback()
            raise


def get_catalog_service(
    request: Request,
    repository: Annotated[CatalogRepository, Depends(get_repository)],
    storage: Annotated[StorageClient, Depends(get_storage_client)],
    config: Annotated[UploadConfig, Depends(get_upload_config)],
) -> CatalogService:
    """Get catalog service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    coordinator = BatchCoordinator(config, storage=storage, request_id=request_id)
    return CatalogService(repository, coordinator, request_id=request_id)
