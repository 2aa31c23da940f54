"""Category API endpoints.

Provides endpoints for listing, creating, updating and deleting
categories. Create and update upload the submitted images before the
category is written.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_catalog_service
from app.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from app.catalog.service import CatalogService

router = APIRouter(prefix="/api/category", tags=["Categories"])

_WRITE_ERRORS = {
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.get(
    "/",
    response_model=list[CategoryResponse],
    summary="List categories",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[CategoryResponse]:
    """List all categories."""
    categories = await service.list_categories()
    return [CategoryResponse.from_entity(c) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    """Get a category by ID."""
    return CategoryResponse.from_entity(await service.get_category(category_id))


@router.post(
    "/create",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create category",
    description="Upload the submitted images, then create the category.",
)
async def create_category(
    body: CategoryCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    """Create a category.

    Args:
        body: Category fields and encoded images.
        service: Catalog service.

    Returns:
        Created category with remote image URLs in submission order.
    """
    category = await service.create_category(
        body.model_dump(exclude={"images"}),
        images=body.images,
    )
    return CategoryResponse.from_entity(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}, **_WRITE_ERRORS},
    summary="Update category",
    description="Update fields; a non-empty image list replaces the current images.",
)
async def update_category(
    category_id: str,
    body: CategoryUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CategoryResponse:
    """Update a category.

    Args:
        category_id: Category identifier.
        body: Changed fields and optional new images.
        service: Catalog service.

    Returns:
        Updated category.
    """
    category = await service.update_category(
        category_id,
        body.model_dump(exclude={"images"}, exclude_unset=True, exclude_none=True),
        images=body.images,
    )
    return CategoryResponse.from_entity(category)


@router.delete(
    "/{category_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete category",
)
async def delete_category(
    category_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> DeleteResponse:
    """Delete a category by ID."""
    await service.delete_category(category_id)
    return DeleteResponse(message="Category deleted")
