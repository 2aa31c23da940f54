"""Media ingestion.

Bounded-concurrency upload of image batches to object storage, ahead of
catalog persistence.
"""

from app.ingestion.coordinator import BatchCoordinator, BatchResult, UploadConfig
from app.ingestion.limiter import ConcurrencyLimiter, LimiterToken
from app.ingestion.uploader import UploadTaskRunner

__all__ = [
    # Limiter
    "ConcurrencyLimiter",
    "LimiterToken",
    # Task runner
    "UploadTaskRunner",
    # Coordinator
    "BatchCoordinator",
    "BatchResult",
    "UploadConfig",
]
