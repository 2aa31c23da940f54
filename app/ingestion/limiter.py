"""Concurrency limiter for upload tasks.

A capacity-bounded gate built on ``asyncio.Semaphore``. Every admitted
operation holds a LimiterToken until it is released; outstanding tokens
never exceed the configured capacity.
"""

import asyncio
import itertools
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from app.domain.exceptions import TokenAlreadyReleasedError


@dataclass(eq=False)
class LimiterToken:
    """One unit of concurrency capacity."""

    id: int
    released: bool = field(default=False, repr=False)


class ConcurrencyLimiter:
    """Admits at most ``capacity`` concurrent operations.

    Waiters are admitted in FIFO order by the underlying semaphore.

    Example usage:
        limiter = ConcurrencyLimiter(capacity=2)
        token = await limiter.acquire()
        try:
            await do_work()
        finally:
            limiter.release(token)
    """

    def __init__(self, capacity: int) -> None:
        """Initialize limiter.

        Args:
            capacity: Maximum number of concurrently held tokens.

        Raises:
            ValueError: If capacity is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"Limiter capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self._outstanding: set[int] = set()
        self._serial = itertools.count(1)

    @property
    def capacity(self) -> int:
        """Configured capacity."""
        return self._capacity

    @property
    def in_use(self) -> int:
        """Number of acquired, unreleased tokens."""
        return len(self._outstanding)

    @property
    def available(self) -> int:
        """Number of tokens that can be acquired without waiting."""
        return self._capacity - len(self._outstanding)

    async def acquire(self) -> LimiterToken:
        """Wait for a free slot and take it.

        Returns:
            Token to pass back to release().
        """
        await self._semaphore.acquire()
        token = LimiterToken(id=next(self._serial))
        self._outstanding.add(token.id)
        return token

    def release(self, token: LimiterToken) -> None:
        """Return a token to the pool.

        Args:
            token: Token obtained from acquire().

        Raises:
            TokenAlreadyReleasedError: If the token was already released.
        """
        if token.released or token.id not in self._outstanding:
            raise TokenAlreadyReleasedError(token.id)
        token.released = True
        self._outstanding.discard(token.id)
        self._semaphore.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[LimiterToken]:
        """Hold a token for the duration of the block."""
        token = await self.acquire()
        try:
            yield token
        finally:
            self.release(token)
