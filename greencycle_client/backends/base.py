from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import Optional

from greencycle_client.types import CacheEntry


class BaseCacheBackend(ABC):
    """Base class for all lookup cache backends."""

    @abstractmethod
    async def get(self, key: int) -> Optional[CacheEntry[Any]]:
        """Retrieve a cached entry, stale or not."""

    @abstractmethod
    async def set(self, key: int, entry: CacheEntry[Any]) -> None:
        """Store an entry, replacing any previous one for the key."""

    @abstractmethod
    async def delete(self, key: int) -> None:
        """Remove an entry from the cache."""

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""

    @abstractmethod
    async def keys(self) -> list[int]:
        """List the keys currently held."""

    async def size(self) -> int:
        return len(await self.keys())
