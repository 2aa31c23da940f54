"""Upload task runner.

Uploads a single image payload through the concurrency limiter and turns
the outcome into a tagged UploadResult. The limiter token is released on
every exit path, cancellation included.
"""

import structlog

from app.domain.value_objects import (
    ImagePayload,
    UploadErrorKind,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)
from app.infrastructure.storage_client import (
    StorageClient,
    StorageNetworkError,
    StorageServiceError,
)
from app.ingestion.limiter import ConcurrencyLimiter

logger = structlog.get_logger()


class UploadTaskRunner:
    """Runs one limiter-gated upload per call."""

    def __init__(
        self,
        storage: StorageClient,
        limiter: ConcurrencyLimiter,
        request_id: str | None = None,
    ) -> None:
        """Initialize runner.

        Args:
            storage: Object storage client.
            limiter: Limiter shared by all tasks of a batch.
            request_id: Request ID for correlation.
        """
        self.storage = storage
        self.limiter = limiter
        self.request_id = request_id

    async def upload_one(self, payload: ImagePayload) -> UploadResult:
        """Upload one payload.

        Never raises for storage failures; they are returned as
        UploadFailure. Cancellation propagates after the token is released.

        Args:
            payload: Image to upload.

        Returns:
            UploadSuccess with the remote URL, or UploadFailure.
        """
        token = await self.limiter.acquire()
        try:
            remote_url = await self.storage.upload(payload.data)
        except StorageNetworkError as e:
            return self._failure(payload, UploadErrorKind.NETWORK, e)
        except StorageServiceError as e:
            return self._failure(payload, UploadErrorKind.STORAGE, e)
        except Exception as e:
            return self._failure(payload, UploadErrorKind.UNEXPECTED, e)
        finally:
            self.limiter.release(token)

        logger.debug(
            "Image uploaded",
            position=payload.position,
            remote_url=remote_url,
            request_id=self.request_id,
        )
        return UploadSuccess(position=payload.position, remote_url=remote_url)

    def _failure(
        self,
        payload: ImagePayload,
        kind: UploadErrorKind,
        error: Exception,
    ) -> UploadFailure:
        logger.warning(
            "Image upload failed",
            position=payload.position,
            error_kind=kind.value,
            error=str(error),
            request_id=self.request_id,
        )
        return UploadFailure(
            position=payload.position,
            error_kind=kind,
            cause=str(error) or type(error).__name__,
        )
