import asyncio
import time
from logging import getLogger
from typing import Any
from typing import Optional

from greencycle_client.types import CacheEntry
from greencycle_client.types import Clock

from .base import BaseCacheBackend

logger = getLogger(__name__)


class MemoryBackend(BaseCacheBackend):
    """In-memory cache backend implementation."""

    def __init__(
        self,
        max_age: float | None = None,
        clock: Clock = time.time,
        cleanup_interval: float = 60,
    ) -> None:
        self.cache: dict[int, CacheEntry[Any]] = {}
        self.lock = asyncio.Lock()
        self.max_age = max_age
        self.clock = clock
        self.cleanup_interval = cleanup_interval
        self._cleanup_task: asyncio.Task[None] | None = None

    async def get(self, key: int) -> Optional[CacheEntry[Any]]:
        async with self.lock:
            return self.cache.get(key)

    async def set(self, key: int, entry: CacheEntry[Any]) -> None:
        async with self.lock:
            self.cache[key] = entry

    async def delete(self, key: int) -> None:
        async with self.lock:
            self.cache.pop(key, None)

    async def clear(self) -> None:
        async with self.lock:
            self.cache.clear()

    async def keys(self) -> list[int]:
        async with self.lock:
            return list(self.cache)

    async def size(self) -> int:
        async with self.lock:
            return len(self.cache)

    def start_cleanup(self) -> None:
        """Start the periodic sweep of stale entries on the running loop."""
        if self.max_age is None:
            logger.debug("Entries never expire, cleanup task not started")
            return
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    def stop_cleanup(self) -> None:
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            self._cleanup_task = None

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            await self.cleanup()

    async def cleanup(self) -> int:
        """Drop stale entries and return how many were removed."""
        if self.max_age is None:
            return 0
        async with self.lock:
            now = self.clock()
            expired_keys = [
                k for k, v in self.cache.items() if not v.is_fresh(self.max_age, now)
            ]
            for key in expired_keys:
                self.cache.pop(key, None)
        if expired_keys:
            logger.debug("Removed %d stale entries", len(expired_keys))
        return len(expired_keys)
