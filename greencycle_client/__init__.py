"""greencycle-client: cached async client for the Green Cycle recycling API."""

from .api import ApiClient as ApiClient
from .cache import LookupCache as LookupCache
from .config import ClientConfig as ClientConfig
from .events import RefreshBus as RefreshBus
from .services import CollectionService as CollectionService
from .session import AppSession as AppSession

__all__ = [
    "ApiClient",
    "AppSession",
    "ClientConfig",
    "CollectionService",
    "LookupCache",
    "RefreshBus",
]
