"""Catalog API main application module.

This module initializes the FastAPI application and configures
middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.categories import router as categories_router
from app.api.dependencies import close_storage_client
from app.api.middleware import setup_middleware
from app.api.products import router as products_router
from app.api.schemas import ErrorDetail, ErrorResponse
from app.domain.exceptions import (
    CatalogValidationError,
    DomainError,
    PersistenceError,
    RecordNotFoundError,
    StorageUploadError,
)
from app.infrastructure.config import settings
from app.infrastructure.logging import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting catalog API",
        version=settings.api_version,
        catalog_backend=settings.catalog_backend,
        upload_concurrency=settings.upload_concurrency,
    )

    yield

    await close_storage_client()
    logger.info("Shutting down catalog API")


app = FastAPI(
    title="Catalog API",
    description="Category and product management with image ingestion",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middleware(app)

app.include_router(categories_router)
app.include_router(products_router)


# ============================================================================
# Exception Handlers
# ============================================================================


def _error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[ErrorDetail] | None = None,
    context: dict | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details or [],
        context=context or {},
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(CatalogValidationError)
async def validation_error_handler(request: Request, exc: CatalogValidationError):
    """Reject malformed catalog metadata."""
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        exc.message,
        details=[ErrorDetail(field=exc.field, message=exc.reason)],
        context=exc.details,
    )


@app.exception_handler(RecordNotFoundError)
async def not_found_handler(request: Request, exc: RecordNotFoundError):
    """Report a missing category or product."""
    return _error_response(
        request,
        status.HTTP_404_NOT_FOUND,
        f"{exc.entity_type.upper()}_NOT_FOUND",
        exc.message,
        context=exc.details,
    )


@app.exception_handler(StorageUploadError)
async def storage_upload_error_handler(request: Request, exc: StorageUploadError):
    """Report a failed image batch; nothing was persisted."""
    return _error_response(
        request,
        status.HTTP_502_BAD_GATEWAY,
        "STORAGE_UPLOAD_FAILED",
        exc.message,
        details=[
            ErrorDetail(
                field=f"images[{position - 1}]",
                message=f"upload failed at position {position}",
            )
            for position in exc.positions
        ],
        context=exc.details,
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    """Report a write failure after the images were uploaded."""
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "PERSISTENCE_FAILED",
        f"Failed to save {exc.entity_type}",
        context={"orphaned_urls": exc.orphaned_urls},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Handle any other domain rule violation."""
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "DOMAIN_ERROR",
        exc.message,
        context=exc.details,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        return _error_response(
            request,
            exc.status_code,
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
        )
    return _error_response(request, exc.status_code, "ERROR", str(detail))
