"""Translation layer between inventory records and the record store.

The store keeps the legacy vocabulary (``disponible``/``en_transito``,
``bodega_N``); everything above this module only sees ``ItemStatus`` and
``Warehouse``.
"""
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_app.exceptions import NotFoundError, PersistenceError
from inventory_app.models.inventory_item import InventoryItem
from inventory_app.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryRecord,
    ItemStatus,
    Warehouse,
)

logger = logging.getLogger(__name__)

STATUS_TO_STORE = {
    ItemStatus.NEW: "disponible",
    ItemStatus.USED: "en_transito",
}
STATUS_FROM_STORE = {v: k for k, v in STATUS_TO_STORE.items()}

WAREHOUSE_TO_STORE = {
    Warehouse.WAREHOUSE_1: "bodega_1",
    Warehouse.WAREHOUSE_2: "bodega_2",
    Warehouse.WAREHOUSE_3: "bodega_3",
}
WAREHOUSE_FROM_STORE = {v: k for k, v in WAREHOUSE_TO_STORE.items()}


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_document(fields: dict) -> dict:
    """Map editable record fields to store columns. Only keys present are mapped."""
    doc = dict(fields)
    if "status" in doc:
        doc["status"] = STATUS_TO_STORE[ItemStatus(doc["status"])]
    if "warehouse" in doc:
        doc["warehouse"] = WAREHOUSE_TO_STORE[Warehouse(doc["warehouse"])]
    return doc


def from_document(item: InventoryItem, action: str = "list", now: datetime | None = None) -> InventoryRecord:
    status = STATUS_FROM_STORE.get(item.status)
    warehouse = WAREHOUSE_FROM_STORE.get(item.warehouse)
    if status is None or warehouse is None:
        raise PersistenceError(action, f"malformed item {item.id}: status={item.status!r} warehouse={item.warehouse!r}")

    # Missing timestamps read as "now" instead of failing the read
    now = now or utcnow()
    created_at = item.created_at or now
    updated_at = max(item.updated_at or now, created_at)

    image_url = item.image_url or None
    image_public_id = item.image_public_id or None
    if image_url is None or image_public_id is None:
        image_url = image_public_id = None

    return InventoryRecord(
        id=item.id,
        description=item.description,
        status=status,
        warehouse=warehouse,
        image_url=image_url,
        image_public_id=image_public_id,
        created_at=created_at,
        updated_at=updated_at,
    )


def _get_document(db: Session, item_id: str) -> InventoryItem | None:
    return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()


def create_item(db: Session, data: InventoryItemCreate) -> str:
    now = utcnow()
    item = InventoryItem(**to_document(data.model_dump()), created_at=now, updated_at=now)
    try:
        db.add(item)
        db.flush()
        item_id = item.id
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error creating inventory item: %s", e)
        raise PersistenceError("create", str(e)) from e
    logger.info("Created inventory item %s", item_id)
    return item_id


def list_items(db: Session) -> list[InventoryRecord]:
    """Every record, newest ``created_at`` first."""
    try:
        docs = db.query(InventoryItem).order_by(InventoryItem.created_at.desc()).all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error getting inventory items: %s", e)
        raise PersistenceError("list", str(e)) from e

    now = utcnow()
    try:
        records = [from_document(doc, "list", now) for doc in docs]
    except PersistenceError as e:
        logger.error("Error getting inventory items: %s", e)
        raise
    # Rows without created_at count as "now"; NULL ordering differs between backends
    records.sort(key=lambda r: r.created_at, reverse=True)
    return records


def get_item(db: Session, item_id: str) -> InventoryRecord:
    try:
        doc = _get_document(db, item_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error getting inventory item %s: %s", item_id, e)
        raise PersistenceError("get", str(e)) from e
    if doc is None:
        raise NotFoundError(item_id)
    return from_document(doc, "get")


def update_item(db: Session, item_id: str, data: InventoryItemUpdate) -> None:
    """Merge the provided fields into the stored record and refresh ``updated_at``."""
    fields = to_document(data.model_dump(exclude_unset=True))
    try:
        item = _get_document(db, item_id)
        if item is None:
            raise NotFoundError(item_id)
        for field, value in fields.items():
            setattr(item, field, value)

        now = utcnow()
        previous = item.updated_at or item.created_at
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        item.updated_at = now
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error updating inventory item %s: %s", item_id, e)
        raise PersistenceError("update", str(e)) from e
    logger.info("Updated inventory item %s (%s)", item_id, ", ".join(sorted(fields)) or "no fields")


def delete_item(db: Session, item_id: str) -> str | None:
    """Remove a record permanently.

    Returns the media host deletion handle of the removed record, if it had
    an image, so the caller can schedule the cleanup.
    """
    try:
        item = _get_document(db, item_id)
        if item is None:
            raise NotFoundError(item_id)
        public_id = item.image_public_id or None
        db.delete(item)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error deleting inventory item %s: %s", item_id, e)
        raise PersistenceError("delete", str(e)) from e
    logger.info("Deleted inventory item %s", item_id)
    return public_id
