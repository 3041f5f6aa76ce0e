"""Type definitions and type aliases for greencycle-client."""

from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic
from typing import TypeVar

T = TypeVar("T")

# Signature of the fetch function handed to LookupCache.get
FetchFn = Callable[[int], Awaitable[T]]

# Returns the current time in epoch seconds
Clock = Callable[[], float]


@dataclass
class CacheEntry(Generic[T]):
    """Cached value together with the moment it was fetched.

    Args:
        value: The fetched record (None is a valid "no record" value)
        fetched_at: Epoch timestamp, in seconds, of the successful fetch
    """

    value: T
    fetched_at: float

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def is_fresh(self, max_age: float | None, now: float) -> bool:
        """Whether the entry may still be served (max_age None = never stale)."""
        if max_age is None:
            return True
        return self.age(now) < max_age
