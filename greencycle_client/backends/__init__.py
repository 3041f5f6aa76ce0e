"""Cache backend implementations for greencycle-client."""

from .base import BaseCacheBackend
from .memory import MemoryBackend

__all__ = [
    "BaseCacheBackend",
    "MemoryBackend",
]
