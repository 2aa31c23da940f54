"""Product API endpoints.

Provides endpoints for listing, creating, updating and deleting
products. Create and update upload the submitted images before the
product is written.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_catalog_service
from app.api.schemas import (
    DeleteResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from app.catalog.service import CatalogService

router = APIRouter(prefix="/api/products", tags=["Products"])

_WRITE_ERRORS = {
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.get(
    "/",
    response_model=list[ProductResponse],
    summary="List products",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    category_id: Annotated[str | None, Query(description="Filter by category")] = None,
) -> list[ProductResponse]:
    """List products with their categories, optionally filtered by category."""
    products = await service.list_products(category_id)
    categories = await service.categories_for(products)
    return [ProductResponse.from_entity(p, categories.get(p.category_id)) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a product by ID."""
    return ProductResponse.from_entity(await service.get_product(product_id))


@router.post(
    "/create",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    summary="Create product",
    description="Check the category, upload the submitted images, then create the product.",
)
async def create_product(
    body: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Create a product.

    Args:
        body: Product fields and encoded images.
        service: Catalog service.

    Returns:
        Created product with remote image URLs in submission order.
    """
    product = await service.create_product(
        body.model_dump(exclude={"images"}),
        images=body.images,
    )
    return ProductResponse.from_entity(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses=_WRITE_ERRORS,
    summary="Update product",
    description="Update fields; a non-empty image list replaces the current images.",
)
async def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Update a product.

    Args:
        product_id: Product identifier.
        body: Changed fields and optional new images.
        service: Catalog service.

    Returns:
        Updated product.
    """
    product = await service.update_product(
        product_id,
        body.model_dump(exclude={"images"}, exclude_unset=True, exclude_none=True),
        images=body.images,
    )
    return ProductResponse.from_entity(product)


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> DeleteResponse:
    """Delete a product by ID."""
    await service.delete_product(product_id)
    return DeleteResponse(message="Product deleted")
