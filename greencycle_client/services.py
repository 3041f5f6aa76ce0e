"""Collection detail lookups backed by lookup caches."""

import asyncio
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from logging import getLogger
from typing import Optional

from greencycle_client.api import ApiClient
from greencycle_client.cache import LookupCache
from greencycle_client.events import COLLECTION_CHANGED
from greencycle_client.events import RefreshBus
from greencycle_client.exceptions import GreenCycleError
from greencycle_client.exceptions import NotFoundError
from greencycle_client.models import CollectionDetail
from greencycle_client.models import PartyRecord

logger = getLogger(__name__)


@dataclass
class CacheStatus:
    collections_count: int
    phones_count: int
    collections: list[int] = field(default_factory=list)
    phones: list[int] = field(default_factory=list)


class CollectionService:
    """Serve collection details and phone numbers with as few requests as possible.

    Args:
        api: Client for the upstream API
        collection_cache: Cache of collection details keyed by collection id
        phone_cache: Cache of phone numbers keyed by user id; None is
            stored for users without a phone
        bus: Channel notified when a collection changes
    """

    def __init__(
        self,
        api: ApiClient,
        collection_cache: LookupCache[CollectionDetail],
        phone_cache: LookupCache[Optional[str]],
        bus: RefreshBus | None = None,
    ) -> None:
        self.api = api
        self.collection_cache = collection_cache
        self.phone_cache = phone_cache
        self.bus = bus

    async def _fetch_phone(self, user_id: int) -> Optional[str]:
        try:
            record = await self.api.fetch_phone(user_id)
        except NotFoundError:
            logger.info("No phone registered for user %d", user_id)
            return None
        return record.numero

    async def phone_for_user(
        self, user_id: int, *, force_refresh: bool = False
    ) -> Optional[str]:
        """Phone number of a user, None when the user has none registered."""
        return await self.phone_cache.get(
            user_id, self._fetch_phone, force_refresh=force_refresh
        )

    async def _party_phone(
        self,
        role: str,
        party_id: int,
        resolve: Callable[[int], Awaitable[PartyRecord]],
    ) -> Optional[str]:
        # The party id is tried as a user id first, then resolved through
        # the party record.
        try:
            phone = await self.phone_for_user(party_id)
            if phone is not None:
                return phone

            party = await resolve(party_id)
            user_id = party.user_id
            if user_id is None or user_id == party_id:
                return None
            logger.debug("Resolved %s %d to user %d", role, party_id, user_id)
            return await self.phone_for_user(user_id)
        except GreenCycleError as e:
            logger.warning("Could not load phone of %s %d: %s", role, party_id, e)
            return None

    async def _fetch_detail(self, collection_id: int) -> CollectionDetail:
        logger.debug("Loading collection %d from the API", collection_id)
        detail = await self.api.fetch_collection(collection_id)

        lookups: dict[str, Awaitable[Optional[str]]] = {}
        if detail.cliente_id and detail.cliente_telefone is None:
            lookups["cliente_telefone"] = self._party_phone(
                "client", detail.cliente_id, self.api.fetch_client
            )
        if detail.parceiro_id and detail.parceiro_telefone is None:
            lookups["parceiro_telefone"] = self._party_phone(
                "partner", detail.parceiro_id, self.api.fetch_partner
            )
        if not lookups:
            return detail

        phones = await asyncio.gather(*lookups.values())
        return detail.model_copy(update=dict(zip(lookups, phones)))

    async def collection_detail(
        self, collection_id: int, *, force_refresh: bool = False
    ) -> CollectionDetail:
        """Detail of a collection request with client and partner phones.

        Raises:
            ApiError: If the collection itself could not be fetched
            ResponseValidationError: If the API returned a malformed record
        """
        return await self.collection_cache.get(
            collection_id, self._fetch_detail, force_refresh=force_refresh
        )

    async def invalidate_collection(self, collection_id: int) -> None:
        """Forget a collection after it changed and tell the subscribers."""
        await self.collection_cache.invalidate(collection_id)
        if self.bus is not None:
            await self.bus.publish(COLLECTION_CHANGED, collection_id)

    async def invalidate_phone(self, user_id: int) -> None:
        await self.phone_cache.invalidate(user_id)

    async def clear(self, *, phones: bool = True) -> None:
        await self.collection_cache.clear()
        if phones:
            await self.phone_cache.clear()

    async def cache_status(self) -> CacheStatus:
        collections = await self.collection_cache.keys()
        phones = await self.phone_cache.keys()
        return CacheStatus(
            collections_count=len(collections),
            phones_count=len(phones),
            collections=collections,
            phones=phones,
        )
