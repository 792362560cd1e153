import pytest

from inventory_app.schemas.inventory import ItemStatus, Warehouse
from inventory_app.services.filter_service import filter_records


@pytest.fixture
def records(make_record):
    return [
        make_record(description="Dell Monitor 24\"", status=ItemStatus.NEW, warehouse=Warehouse.WAREHOUSE_2),
        make_record(description="HP laptop", status=ItemStatus.USED, warehouse=Warehouse.WAREHOUSE_1),
        make_record(description="monitor arm", status=ItemStatus.USED, warehouse=Warehouse.WAREHOUSE_2),
        make_record(description="Desk lamp", status=ItemStatus.NEW, warehouse=Warehouse.WAREHOUSE_3),
    ]


def _is_subsequence(sub, seq):
    it = iter(seq)
    return all(any(x is y for y in it) for x in sub)


def test_no_filters_returns_input_unchanged(records):
    assert filter_records(records, "", "all", "all") == records


def test_query_is_case_insensitive_substring(records):
    result = filter_records(records, "MONITOR")
    assert [r.description for r in result] == ["Dell Monitor 24\"", "monitor arm"]


def test_filters_are_conjunctive(records):
    result = filter_records(records, "monitor", "used", "warehouse_2")
    assert [r.description for r in result] == ["monitor arm"]

    assert filter_records(records, "monitor", ItemStatus.NEW, Warehouse.WAREHOUSE_3) == []


def test_status_and_warehouse_filters(records):
    assert [r.description for r in filter_records(records, status="new")] == ["Dell Monitor 24\"", "Desk lamp"]
    assert [r.description for r in filter_records(records, warehouse="warehouse_1")] == ["HP laptop"]


@pytest.mark.parametrize(
    "query,status,warehouse",
    [
        ("", "all", "all"),
        ("o", "all", "all"),
        ("monitor", "used", "all"),
        ("", "new", "warehouse_3"),
        ("zzz", "all", "all"),
    ],
)
def test_result_is_ordered_subsequence_and_idempotent(records, query, status, warehouse):
    once = filter_records(records, query, status, warehouse)
    twice = filter_records(once, query, status, warehouse)

    assert _is_subsequence(once, records)
    assert len({r.id for r in once}) == len(once)
    assert twice == once


def test_does_not_modify_input(records):
    snapshot = list(records)
    filter_records(records, "lamp", "new", "warehouse_3")
    assert records == snapshot


def test_unknown_status_is_rejected(records):
    with pytest.raises(ValueError):
        filter_records(records, status="sold")
