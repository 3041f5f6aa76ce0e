"""Fetch-through lookup cache keyed by numeric entity id."""

import time
from logging import getLogger
from typing import Generic
from typing import Optional

from greencycle_client.backends import BaseCacheBackend
from greencycle_client.backends import MemoryBackend
from greencycle_client.types import CacheEntry
from greencycle_client.types import Clock
from greencycle_client.types import FetchFn
from greencycle_client.types import T

logger = getLogger(__name__)


def _check_key(key: int) -> None:
    if isinstance(key, bool) or not isinstance(key, int) or key <= 0:
        msg = f"Cache key must be a positive integer, got {key!r}"
        raise ValueError(msg)


class LookupCache(Generic[T]):
    """Time-bounded cache in front of an async fetch function.

    Entries are created lazily on a miss and replaced wholesale on a forced
    refresh or once they are older than ``max_age`` seconds. A failed fetch
    leaves the cache as it was and the error reaches the caller untouched.

    Concurrent misses on the same key are not de-duplicated: each caller
    runs the fetch function and the last store wins.

    Args:
        max_age: Seconds an entry stays fresh, or None for no expiry
        backend: Storage for the entries (a MemoryBackend by default)
        clock: Returns the current time in epoch seconds
        name: Label used in log records
    """

    def __init__(
        self,
        max_age: float | None,
        *,
        backend: BaseCacheBackend | None = None,
        clock: Clock = time.time,
        name: str = "lookup",
    ) -> None:
        if max_age is not None and max_age <= 0:
            msg = "max_age must be positive or None"
            raise ValueError(msg)
        self.max_age = max_age
        self.clock = clock
        self.name = name
        self.backend = (
            backend if backend is not None else MemoryBackend(max_age, clock=clock)
        )

    async def get(
        self, key: int, fetch_fn: FetchFn[T], *, force_refresh: bool = False
    ) -> T:
        """Return the record for ``key``, fetching it on a miss or when stale.

        Args:
            key: Positive integer id of the record
            fetch_fn: Coroutine function retrieving the authoritative record
            force_refresh: Skip the cached copy even if it is fresh

        Returns:
            The cached or freshly fetched record

        Raises:
            ValueError: If the key is not a positive integer
        """
        _check_key(key)

        if not force_refresh:
            entry = await self.backend.get(key)
            if entry is not None and entry.is_fresh(self.max_age, self.clock()):
                logger.debug("[%s] cache hit for %d", self.name, key)
                return entry.value

        logger.debug(
            "[%s] fetching %d (%s)",
            self.name,
            key,
            "forced" if force_refresh else "miss",
        )
        value = await fetch_fn(key)

        await self.backend.set(key, CacheEntry(value=value, fetched_at=self.clock()))
        return value

    async def peek(self, key: int) -> Optional[CacheEntry[T]]:
        """Return the cached entry without fetching, even if it is stale."""
        _check_key(key)
        return await self.backend.get(key)

    async def invalidate(self, key: int) -> None:
        _check_key(key)
        logger.debug("[%s] invalidating %d", self.name, key)
        await self.backend.delete(key)

    async def clear(self) -> None:
        logger.debug("[%s] clearing cache", self.name)
        await self.backend.clear()

    async def size(self) -> int:
        return await self.backend.size()

    async def keys(self) -> list[int]:
        return await self.backend.keys()
