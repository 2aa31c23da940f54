"""Object storage HTTP client for image uploads.

Talks to a Cloudinary-compatible upload API and returns the secure URL
of each stored image. Errors are split into network failures and
storage-side rejections so callers can tag them.
"""

import hashlib
import time
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

logger = structlog.get_logger()


# ============================================================================
# Errors
# ============================================================================


class StorageClientError(Exception):
    """Error from object storage call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class StorageNetworkError(StorageClientError):
    """The storage service could not be reached or did not answer in time."""

    pass


class StorageServiceError(StorageClientError):
    """The storage service rejected the upload or answered malformed data."""

    pass


# ============================================================================
# Client Protocol
# ============================================================================


class StorageClient(Protocol):
    """Anything that can store an encoded image and return its URL."""

    async def upload(self, data: str) -> str:
        """Upload an encoded image.

        Args:
            data: Data URI, base64 string or remote URL.

        Returns:
            Secure URL of the stored image.
        """
        ...


# ============================================================================
# Cloudinary Client
# ============================================================================


@dataclass(frozen=True)
class CloudinaryCredentials:
    """Account credentials for the upload API."""

    cloud_name: str
    api_key: str
    api_secret: str = ""
    base_url: str = "https://api.cloudinary.com"

    def __repr__(self) -> str:
        """Return a representation without the secret."""
        return f"CloudinaryCredentials(cloud_name={self.cloud_name!r}, api_key={self.api_key!r})"


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the upload signature.

    Parameters are sorted by name, serialized as ``name=value`` joined
    with ``&``, suffixed with the API secret and hashed with SHA-1.

    Args:
        params: Parameters to sign (excluding file and api_key).
        api_secret: Account secret.

    Returns:
        Hex digest signature.
    """
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params) if params[k] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryStorageClient:
    """HTTP client for the Cloudinary image upload endpoint.

    Example usage:
        client = CloudinaryStorageClient(credentials, timeout=30.0)
        try:
            url = await client.upload("data:image/png;base64,iVBOR...")
        finally:
            await client.close()
    """

    def __init__(
        self,
        credentials: CloudinaryCredentials,
        timeout: float = 30.0,
        folder: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize storage client.

        Args:
            credentials: Account credentials.
            timeout: Request timeout in seconds.
            folder: Optional target folder for uploaded images.
            transport: Optional transport override.
        """
        self.credentials = credentials
        self.timeout = timeout
        self.folder = folder
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def upload_path(self) -> str:
        """Path of the upload endpoint."""
        return f"/v1_1/{self.credentials.cloud_name}/image/upload"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.credentials.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CloudinaryStorageClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _form_fields(self, data: str) -> dict[str, Any]:
        params: dict[str, Any] = {"timestamp": int(time.time())}
        if self.folder:
            params["folder"] = self.folder
        return {
            **params,
            "file": data,
            "api_key": self.credentials.api_key,
            "signature": sign_params(params, self.credentials.api_secret),
        }

    async def upload(self, data: str) -> str:
        """Upload an encoded image.

        Args:
            data: Data URI, base64 string or remote URL.

        Returns:
            Secure URL of the stored image.

        Raises:
            StorageNetworkError: On transport failure or timeout.
            StorageServiceError: On rejection or malformed response.
        """
        client = await self._get_client()
        try:
            response = await client.post(self.upload_path, data=self._form_fields(data))
        except httpx.TimeoutException as e:
            raise StorageNetworkError(f"Upload timed out: {e}") from e
        except httpx.TransportError as e:
            raise StorageNetworkError(f"Upload transport error: {e}") from e

        if response.status_code != 200:
            raise StorageServiceError(
                f"Upload rejected: {self._error_message(response)}",
                response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise StorageServiceError("Upload response is not JSON", response.status_code) from e

        secure_url = body.get("secure_url") if isinstance(body, dict) else None
        if not secure_url:
            raise StorageServiceError("Upload response has no secure_url", response.status_code)

        logger.debug(
            "Stored image",
            cloud_name=self.credentials.cloud_name,
            public_id=body.get("public_id"),
            bytes=body.get("bytes"),
        )
        return secure_url

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error = response.json().get("error", {})
            if isinstance(error, dict) and error.get("message"):
                return error["message"]
        except (ValueError, AttributeError):
            pass
        return f"HTTP {response.status_code}"
