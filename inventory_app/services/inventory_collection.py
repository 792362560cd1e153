from sqlalchemy.orm import Session

from inventory_app.schemas.inventory import ALL, InventoryRecord, InventoryStats
from inventory_app.services import record_gateway
from inventory_app.services.filter_service import filter_records
from inventory_app.services.report_service import inventory_summary


class RecordCollection:
    """The last fetched full list of records plus its statistics.

    Owned by whoever loaded it. Never patched in place: after a write the
    owner loads a new collection and replaces its reference.
    """

    def __init__(self, records: list[InventoryRecord] | None = None):
        self._records = tuple(records or ())
        self._stats = inventory_summary(self._records)

    @classmethod
    def load(cls, db: Session) -> "RecordCollection":
        return cls(record_gateway.list_items(db))

    @property
    def records(self) -> tuple[InventoryRecord, ...]:
        return self._records

    @property
    def stats(self) -> InventoryStats:
        return self._stats

    def view(self, query: str = "", status: str = ALL, warehouse: str = ALL) -> list[InventoryRecord]:
        return filter_records(self._records, query, status, warehouse)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)
