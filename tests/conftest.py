"""Shared fixtures: an instrumented in-process object storage fake."""

import asyncio

import pytest

from app.infrastructure.storage_client import StorageServiceError


class FakeStorage:
    """In-process stand-in for the object storage client.

    Each upload yields to the event loop ``steps[data]`` times before it
    finishes, so tests control completion order without wall-clock
    sleeps. Records call order, completion order and peak concurrency.
    """

    def __init__(
        self,
        steps: dict[str, int] | None = None,
        failures: dict[str, Exception] | None = None,
    ) -> None:
        self.steps = steps or {}
        self.failures = failures or {}
        self.calls: list[str] = []
        self.completed: list[str] = []
        self.active = 0
        self.max_active = 0

    @staticmethod
    def url_for(data: str) -> str:
        return f"https://cdn.test/{data}"

    async def upload(self, data: str) -> str:
        self.calls.append(data)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            for _ in range(self.steps.get(data, 0)):
                await asyncio.sleep(0)
            self.completed.append(data)
            if data in self.failures:
                raise self.failures[data]
            return self.url_for(data)
        finally:
            self.active -= 1


@pytest.fixture
def storage_factory():
    """Build FakeStorage instances with custom steps and failures."""
    return FakeStorage


@pytest.fixture
def fake_storage() -> FakeStorage:
    """FakeStorage where every upload succeeds immediately."""
    return FakeStorage()


@pytest.fixture
def rejected() -> StorageServiceError:
    """A storage-side rejection."""
    return StorageServiceError("Invalid image file", 400)
