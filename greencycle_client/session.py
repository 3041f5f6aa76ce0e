"""Per-login container owning the API client, caches and refresh bus."""

import time
from logging import getLogger
from types import TracebackType
from typing import Optional

import httpx

from greencycle_client.api import ApiClient
from greencycle_client.backends import MemoryBackend
from greencycle_client.cache import LookupCache
from greencycle_client.config import ClientConfig
from greencycle_client.events import RefreshBus
from greencycle_client.models import CollectionDetail
from greencycle_client.services import CollectionService
from greencycle_client.types import Clock

logger = getLogger(__name__)


class AppSession:
    """Everything that lives between login and logout.

    Args:
        config: Client configuration
        http_client: Optional pre-built HTTP client handed to ApiClient
        clock: Time source shared by the caches
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Clock = time.time,
    ) -> None:
        self.config = config or ClientConfig()
        self.api = ApiClient(self.config, http_client=http_client)
        self.bus = RefreshBus()

        self._backends = [
            MemoryBackend(
                self.config.collection_ttl,
                clock=clock,
                cleanup_interval=self.config.cleanup_interval,
            ),
            MemoryBackend(
                self.config.phone_ttl,
                clock=clock,
                cleanup_interval=self.config.cleanup_interval,
            ),
        ]
        self.collection_cache: LookupCache[CollectionDetail] = LookupCache(
            self.config.collection_ttl,
            backend=self._backends[0],
            clock=clock,
            name="collections",
        )
        self.phone_cache: LookupCache[Optional[str]] = LookupCache(
            self.config.phone_ttl,
            backend=self._backends[1],
            clock=clock,
            name="phones",
        )
        self.collections = CollectionService(
            self.api, self.collection_cache, self.phone_cache, self.bus
        )
        self.closed = False

    async def start(self) -> None:
        """Start sweeping stale entries; needs a running event loop."""
        for backend in self._backends:
            backend.start_cleanup()

    async def logout(self) -> None:
        """Drop every cached record and subscriber and release the HTTP client."""
        if self.closed:
            return
        logger.info("Closing session for %s", self.config.base_url)
        for backend in self._backends:
            backend.stop_cleanup()
        await self.collections.clear()
        self.bus.clear()
        await self.api.close()
        self.closed = True

    async def __aenter__(self) -> "AppSession":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.logout()
