"""Client-side ordering and counters for lists of collection requests."""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import TypeVar

from greencycle_client.models import CollectionStatus

ItemT = TypeVar("ItemT")

UNKNOWN_PRIORITY = 99

# Client history: ongoing work first, closed requests last
CLIENT_HISTORY_PRIORITY: Mapping[str, int] = {
    CollectionStatus.IN_COLLECTION.value: 1,
    CollectionStatus.PENDING.value: 2,
    CollectionStatus.APPROVED.value: 3,
    CollectionStatus.FAILED.value: 4,
    CollectionStatus.FINALIZED.value: 5,
    CollectionStatus.CANCELLED.value: 6,
}

# Partner dashboard: pending requests belong to the acceptance screen
PARTNER_DASHBOARD_PRIORITY: Mapping[str, int] = {
    CollectionStatus.IN_COLLECTION.value: 1,
    CollectionStatus.APPROVED.value: 2,
    CollectionStatus.FINALIZED.value: 3,
    CollectionStatus.FAILED.value: 4,
    CollectionStatus.CANCELLED.value: 5,
    CollectionStatus.PENDING.value: 6,
}


def _field(name: str) -> Callable[[Any], Any]:
    def getter(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(name)
        return getattr(item, name, None)

    return getter


def parse_timestamp(value: Any) -> float:
    """Epoch seconds for an API date, 0 when missing or unparsable.

    Naive datetimes are read as UTC.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value:
        try:
            moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _status_value(status: Any) -> str | None:
    if status is None:
        return None
    if isinstance(status, CollectionStatus):
        return status.value
    return str(status)


def status_priority(status: Any, priority: Mapping[str, int]) -> int:
    value = _status_value(status)
    if value is None:
        return UNKNOWN_PRIORITY
    return priority.get(value, UNKNOWN_PRIORITY)


def sort_by_status(
    items: Iterable[ItemT],
    priority: Mapping[str, int],
    *,
    status: Callable[[ItemT], Any] = _field("status_solicitacao"),
    created_at: Callable[[ItemT], Any] = _field("criado_em"),
) -> list[ItemT]:
    """Order items by status priority, then newest first.

    Items whose status is missing from ``priority`` go last. Items are read
    through the ``status`` and ``created_at`` accessors, which by default
    look up ``status_solicitacao`` and ``criado_em`` on models or dicts.
    """
    return sorted(
        items,
        key=lambda item: (
            status_priority(status(item), priority),
            -parse_timestamp(created_at(item)),
        ),
    )


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass
class DashboardStats:
    in_collection: int = 0
    approved: int = 0
    finalized: int = 0
    total_weight: float = 0.0
    total_earnings: float = 0.0


def dashboard_stats(
    items: Iterable[ItemT],
    *,
    status: Callable[[ItemT], Any] = _field("status_solicitacao"),
    weight: Callable[[ItemT], Any] = _field("peso_material"),
    earning: Callable[[ItemT], Any] = _field("valor_pagamento"),
) -> DashboardStats:
    """Count requests per state and sum weight and earnings.

    Cancelled requests are left out of the weight and earnings totals.
    """
    stats = DashboardStats()
    for item in items:
        current = _status_value(status(item))
        if current == CollectionStatus.APPROVED.value:
            stats.approved += 1
        elif current == CollectionStatus.IN_COLLECTION.value:
            stats.in_collection += 1
        elif current == CollectionStatus.FINALIZED.value:
            stats.finalized += 1

        if current != CollectionStatus.CANCELLED.value:
            stats.total_weight += _to_float(weight(item))
            stats.total_earnings += _to_float(earning(item))
    return stats
