"""Batch upload coordinator.

Fans a batch of image payloads out as limiter-gated upload tasks, joins
every one of them and reduces the results to a single outcome: the
ordered URL list when every upload succeeded, or the failure with the
lowest position otherwise.

No task is cancelled after a failure is observed. Waiting for all of
them keeps the set of uploaded objects known at the cost of latency on
the failure path.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from app.domain.exceptions import StorageUploadError
from app.domain.value_objects import ImagePayload, UploadFailure, UploadResult, UploadSuccess
from app.infrastructure.storage_client import (
    CloudinaryCredentials,
    CloudinaryStorageClient,
    StorageClient,
)
from app.ingestion.limiter import ConcurrencyLimiter
from app.ingestion.uploader import UploadTaskRunner

logger = structlog.get_logger()


@dataclass(frozen=True)
class UploadConfig:
    """Explicit configuration for media uploads.

    Attributes:
        capacity: Maximum concurrent uploads per batch.
        credentials: Object storage credentials.
        timeout: Per-upload HTTP timeout in seconds.
    """

    capacity: int = 2
    credentials: CloudinaryCredentials | None = None
    timeout: float = 30.0


@dataclass
class BatchResult:
    """Outcome of one batch upload.

    Attributes:
        results: Per-payload results in input order.
    """

    results: list[UploadResult] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """Whether every upload in the batch succeeded."""
        return all(r.ok for r in self.results)

    @property
    def urls(self) -> list[str]:
        """Remote URLs in input order.

        Raises:
            StorageUploadError: If any upload failed.
        """
        self.raise_for_failure()
        return [r.remote_url for r in self.results if isinstance(r, UploadSuccess)]

    @property
    def failures(self) -> list[UploadFailure]:
        """All failures in ascending position order."""
        failures = [r for r in self.results if isinstance(r, UploadFailure)]
        return sorted(failures, key=lambda f: f.position)

    @property
    def failure(self) -> UploadFailure | None:
        """The failure with the lowest position, if any."""
        failures = self.failures
        return failures[0] if failures else None

    @property
    def uploaded_urls(self) -> list[str]:
        """URLs that were uploaded, whether or not the batch succeeded."""
        return [r.remote_url for r in self.results if isinstance(r, UploadSuccess)]

    def raise_for_failure(self) -> None:
        """Raise if the batch did not fully succeed.

        Raises:
            StorageUploadError: Describing the lowest failing position.
        """
        failure = self.failure
        if failure is None:
            return
        raise StorageUploadError(
            position=failure.position,
            error_kind=failure.error_kind.value,
            cause=failure.cause,
            positions=[f.position for f in self.failures],
        )


class BatchCoordinator:
    """Uploads a batch of images with bounded concurrency.

    Example usage:
        coordinator = BatchCoordinator(UploadConfig(capacity=2, credentials=creds))
        result = await coordinator.upload_batch(["data:image/png;base64,..."])
        urls = result.urls
    """

    def __init__(
        self,
        config: UploadConfig,
        storage: StorageClient | None = None,
        limiter: ConcurrencyLimiter | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize coordinator.

        Args:
            config: Upload configuration.
            storage: Object storage client; built from config credentials if omitted.
            limiter: Limiter shared across batches; a fresh one per batch if omitted.
            request_id: Request ID for correlation.

        Raises:
            ValueError: If neither storage nor credentials are given.
        """
        if storage is None:
            if config.credentials is None:
                raise ValueError("UploadConfig.credentials is required without a storage client")
            storage = CloudinaryStorageClient(config.credentials, timeout=config.timeout)
        self.config = config
        self.storage = storage
        self.limiter = limiter
        self.request_id = request_id

    async def upload_batch(self, images: Sequence[ImagePayload | str]) -> BatchResult:
        """Upload every image of the batch.

        All tasks are scheduled at once and the limiter throttles how many
        run. Returns only after every task has finished.

        Args:
            images: Payloads (or raw encoded images) in submission order.

        Returns:
            BatchResult with one result per input position.
        """
        payloads = self._to_payloads(images)
        if not payloads:
            return BatchResult()

        limiter = self.limiter or ConcurrencyLimiter(self.config.capacity)
        runner = UploadTaskRunner(self.storage, limiter, request_id=self.request_id)

        logger.info(
            "Batch upload started",
            image_count=len(payloads),
            capacity=limiter.capacity,
            request_id=self.request_id,
        )

        completed = await asyncio.gather(*(runner.upload_one(p) for p in payloads))

        by_position = {r.position: r for r in completed}
        result = BatchResult(results=[by_position[p.position] for p in payloads])

        if result.succeeded:
            logger.info(
                "Batch upload completed",
                image_count=len(payloads),
                request_id=self.request_id,
            )
        else:
            failure = result.failure
            logger.warning(
                "Batch upload failed",
                image_count=len(payloads),
                failed_positions=[f.position for f in result.failures],
                first_failure_position=failure.position if failure else None,
                uploaded_count=len(result.uploaded_urls),
                request_id=self.request_id,
            )
        return result

    async def upload_urls(self, images: Sequence[ImagePayload | str]) -> list[str]:
        """Upload a batch and return its URLs in input order.

        Raises:
            StorageUploadError: If any upload failed.
        """
        result = await self.upload_batch(images)
        return result.urls

    @staticmethod
    def _to_payloads(images: Sequence[ImagePayload | str]) -> list[ImagePayload]:
        if all(isinstance(image, str) for image in images):
            return ImagePayload.batch(images)
        if not all(isinstance(image, ImagePayload) for image in images):
            raise ValueError("A batch holds either raw images or ImagePayload values, not both")
        payloads = list(images)
        if len({p.position for p in payloads}) != len(payloads):
            raise ValueError("Image positions within a batch must be unique")
        return payloads
