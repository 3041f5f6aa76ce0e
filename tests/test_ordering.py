"""Tests for client-side ordering of collection requests."""

from datetime import datetime
from datetime import timezone

import pytest

from greencycle_client.models import CollectionDetail
from greencycle_client.models import CollectionStatus
from greencycle_client.ordering import CLIENT_HISTORY_PRIORITY
from greencycle_client.ordering import PARTNER_DASHBOARD_PRIORITY
from greencycle_client.ordering import UNKNOWN_PRIORITY
from greencycle_client.ordering import dashboard_stats
from greencycle_client.ordering import parse_timestamp
from greencycle_client.ordering import sort_by_status
from greencycle_client.ordering import status_priority


def request(request_id: int, status: str, created: str | None) -> dict:
    return {"id": request_id, "status_solicitacao": status, "criado_em": created}


def test_client_history_order() -> None:
    items = [
        request(1, "5", "2024-05-05T00:00:00Z"),
        request(2, "4", "2024-05-04T00:00:00Z"),
        request(3, "1", "2024-05-01T00:00:00Z"),
        request(4, "3", "2024-04-01T00:00:00Z"),
        request(5, "1", "2024-05-03T00:00:00Z"),
        request(6, "6", "2024-05-02T00:00:00Z"),
        request(7, "2", "2024-05-02T00:00:00Z"),
    ]

    ordered = sort_by_status(items, CLIENT_HISTORY_PRIORITY)

    assert [i["id"] for i in ordered] == [4, 5, 3, 7, 6, 2, 1]


def test_partner_dashboard_puts_pending_last() -> None:
    items = [
        request(1, "1", "2024-05-05T00:00:00Z"),
        request(2, "5", "2024-05-04T00:00:00Z"),
        request(3, "2", "2024-05-01T00:00:00Z"),
        request(4, "3", "2024-04-01T00:00:00Z"),
    ]

    ordered = sort_by_status(items, PARTNER_DASHBOARD_PRIORITY)

    assert [i["id"] for i in ordered] == [4, 3, 2, 1]


def test_unknown_status_and_missing_dates_go_last() -> None:
    items = [
        request(1, "42", "2024-05-05T00:00:00Z"),
        request(2, "1", None),
        request(3, "1", "2024-05-01T00:00:00Z"),
    ]

    ordered = sort_by_status(items, CLIENT_HISTORY_PRIORITY)

    assert [i["id"] for i in ordered] == [3, 2, 1]


def test_sort_is_stable_and_returns_new_list() -> None:
    items = [request(1, "2", "2024-05-01"), request(2, "2", "2024-05-01")]

    ordered = sort_by_status(items, CLIENT_HISTORY_PRIORITY)

    assert ordered == items
    assert ordered is not items


def test_sort_models_with_custom_accessors(make_collection) -> None:
    details = [
        CollectionDetail.model_validate(
            make_collection(1, status_solicitacao="4", criado_em="2024-01-01T00:00:00")
        ),
        CollectionDetail.model_validate(
            make_collection(2, status_solicitacao="3", criado_em="2024-01-02T00:00:00")
        ),
    ]

    assert [d.id for d in sort_by_status(details, CLIENT_HISTORY_PRIORITY)] == [2, 1]

    wrapped = [{"solicitacao": {"estado": d.status_solicitacao}, "d": d} for d in details]
    ordered = sort_by_status(
        wrapped,
        CLIENT_HISTORY_PRIORITY,
        status=lambda w: w["solicitacao"]["estado"],
        created_at=lambda w: w["d"].criado_em,
    )
    assert [w["d"].id for w in ordered] == [2, 1]


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("3", 1),
        (CollectionStatus.CANCELLED, 6),
        (None, UNKNOWN_PRIORITY),
        ("x", UNKNOWN_PRIORITY),
    ],
)
def test_status_priority(status, expected) -> None:
    assert status_priority(status, CLIENT_HISTORY_PRIORITY) == expected


def test_parse_timestamp() -> None:
    expected = datetime(2024, 5, 1, tzinfo=timezone.utc).timestamp()

    assert parse_timestamp("2024-05-01T00:00:00Z") == expected
    assert parse_timestamp("2024-05-01T00:00:00") == expected
    assert parse_timestamp(datetime(2024, 5, 1)) == expected
    assert parse_timestamp("yesterday") == 0.0
    assert parse_timestamp(None) == 0.0


def test_dashboard_stats() -> None:
    items = [
        {"status_solicitacao": "2", "peso_material": "10", "valor_pagamento": 5},
        {"status_solicitacao": "3", "peso_material": "2.5", "valor_pagamento": 1.5},
        {"status_solicitacao": "4", "peso_material": None, "valor_pagamento": 3},
        {"status_solicitacao": "5", "peso_material": "100", "valor_pagamento": 50},
    ]

    stats = dashboard_stats(items)

    assert stats.approved == 1
    assert stats.in_collection == 1
    assert stats.finalized == 1
    assert stats.total_weight == pytest.approx(12.5)
    assert stats.total_earnings == pytest.approx(9.5)


def test_dashboard_stats_integer_statuses() -> None:
    items = [
        {"status_solicitacao": 2, "peso_material": 1, "valor_pagamento": 2},
        {"status_solicitacao": 5, "peso_material": 10, "valor_pagamento": 20},
        {"status_solicitacao": CollectionStatus.IN_COLLECTION, "peso_material": 3},
    ]

    stats = dashboard_stats(items)

    assert stats.approved == 1
    assert stats.in_collection == 1
    assert stats.total_weight == pytest.approx(4.0)
    assert stats.total_earnings == pytest.approx(2.0)
