from collections.abc import Iterable

from inventory_app.schemas.inventory import InventoryRecord, InventoryStats, ItemStatus, Warehouse


def inventory_summary(records: Iterable[InventoryRecord]) -> InventoryStats:
    records = list(records)
    with_image = sum(1 for r in records if r.has_image)
    return InventoryStats(
        total=len(records),
        new=sum(1 for r in records if r.status == ItemStatus.NEW),
        used=sum(1 for r in records if r.status == ItemStatus.USED),
        with_image=with_image,
        without_image=len(records) - with_image,
        by_warehouse=_group_by_warehouse(records),
    )


def _group_by_warehouse(records: list[InventoryRecord]) -> dict[str, int]:
    counts = {w.value: 0 for w in Warehouse}
    for r in records:
        counts[r.warehouse.value] += 1
    return counts
