from collections.abc import Iterable

from inventory_app.schemas.inventory import ALL, InventoryRecord, ItemStatus, Warehouse


def filter_records(
    records: Iterable[InventoryRecord],
    query: str = "",
    status: ItemStatus | str = ALL,
    warehouse: Warehouse | str = ALL,
) -> list[InventoryRecord]:
    """Visible subset of ``records``, in input order.

    ``query`` matches the description as a case-insensitive substring;
    ``status``/``warehouse`` of ``"all"`` disable that filter.
    """
    needle = query.lower() if query else ""
    status = ItemStatus(status) if status != ALL else None
    warehouse = Warehouse(warehouse) if warehouse != ALL else None

    result = []
    for r in records:
        if needle and needle not in r.description.lower():
            continue
        if status is not None and r.status != status:
            continue
        if warehouse is not None and r.warehouse != warehouse:
            continue
        result.append(r)
    return result
