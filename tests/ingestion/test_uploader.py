"""Tests for the upload task runner."""

import asyncio

import pytest

from app.domain.value_objects import ImagePayload, UploadErrorKind, UploadFailure, UploadSuccess
from app.infrastructure.storage_client import StorageNetworkError
from app.ingestion.limiter import ConcurrencyLimiter
from app.ingestion.uploader import UploadTaskRunner


class BlockingStorage:
    """Storage whose uploads never finish until released."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def upload(self, data: str) -> str:
        self.started.set()
        await self.gate.wait()
        return f"https://cdn.test/{data}"


class TestUploadOne:
    """Tests for UploadTaskRunner.upload_one."""

    @pytest.mark.asyncio
    async def test_success_is_tagged_with_position(self, fake_storage) -> None:
        """A successful upload returns the URL and the payload position."""
        limiter = ConcurrencyLimiter(2)
        runner = UploadTaskRunner(fake_storage, limiter)

        result = await runner.upload_one(ImagePayload(position=4, data="img"))

        assert result == UploadSuccess(position=4, remote_url="https://cdn.test/img")
        assert result.ok
        assert limiter.available == 2

    @pytest.mark.asyncio
    async def test_storage_rejection_is_a_storage_failure(self, storage_factory, rejected) -> None:
        """A storage-side rejection becomes UploadFailure(kind=storage)."""
        limiter = ConcurrencyLimiter(1)
        runner = UploadTaskRunner(storage_factory(failures={"bad": rejected}), limiter)

        result = await runner.upload_one(ImagePayload(position=1, data="bad"))

        assert isinstance(result, UploadFailure)
        assert not result.ok
        assert result.position == 1
        assert result.error_kind is UploadErrorKind.STORAGE
        assert "Invalid image file" in result.cause
        assert limiter.available == 1

    @pytest.mark.asyncio
    async def test_network_error_is_a_network_failure(self, storage_factory) -> None:
        """A transport failure becomes UploadFailure(kind=network)."""
        storage = storage_factory(failures={"img": StorageNetworkError("connection reset")})
        limiter = ConcurrencyLimiter(1)

        result = await UploadTaskRunner(storage, limiter).upload_one(ImagePayload(0, "img"))

        assert result.error_kind is UploadErrorKind.NETWORK
        assert limiter.available == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, storage_factory) -> None:
        """Any other exception is reported, not raised, and capacity is returned."""
        storage = storage_factory(failures={"img": KeyError("secure_url")})
        limiter = ConcurrencyLimiter(1)

        result = await UploadTaskRunner(storage, limiter).upload_one(ImagePayload(0, "img"))

        assert result.error_kind is UploadErrorKind.UNEXPECTED
        assert limiter.available == 1

    @pytest.mark.asyncio
    async def test_cancellation_releases_token(self) -> None:
        """Cancelling an in-flight upload still returns its token."""
        storage = BlockingStorage()
        limiter = ConcurrencyLimiter(1)
        runner = UploadTaskRunner(storage, limiter)

        task = asyncio.create_task(runner.upload_one(ImagePayload(0, "img")))
        await asyncio.wait_for(storage.started.wait(), timeout=1)
        assert limiter.available == 0

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert limiter.available == 1
        assert limiter.in_use == 0
