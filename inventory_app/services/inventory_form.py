import logging
from enum import Enum as PyEnum

from sqlalchemy.orm import Session

from inventory_app.exceptions import NotFoundError, PersistenceError, ValidationError
from inventory_app.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryRecord,
    ItemStatus,
    SubmitResult,
    Warehouse,
)
from inventory_app.services import record_gateway

logger = logging.getLogger(__name__)


class FormMode(str, PyEnum):
    CREATE = "create"
    EDIT = "edit"


class InventoryForm:
    """Staged editable fields of one record.

    Built without a record it creates; built from an existing record it
    edits that record with a full-field replace. A failed submit keeps the
    staged fields so the caller can retry.
    """

    def __init__(self, record: InventoryRecord | None = None):
        self.record_id = record.id if record else None
        self.mode = FormMode.EDIT if record else FormMode.CREATE
        self.description = record.description if record else ""
        self.status = record.status if record else ItemStatus.NEW
        self.warehouse = record.warehouse if record else Warehouse.WAREHOUSE_1
        self.image_url = record.image_url if record else None
        self.image_public_id = record.image_public_id if record else None
        self.error: str | None = None

    def populate(self, data: InventoryItemCreate) -> None:
        self.description = data.description
        self.status = data.status
        self.warehouse = data.warehouse
        if data.image_url is None:
            self.remove_image()
        else:
            self.set_image(data.image_url, data.image_public_id)

    def set_image(self, image_url: str, image_public_id: str) -> None:
        self.image_url = image_url
        self.image_public_id = image_public_id

    def remove_image(self) -> None:
        self.image_url = None
        self.image_public_id = None

    def fields(self) -> InventoryItemCreate:
        return InventoryItemCreate(
            description=self.description,
            status=self.status,
            warehouse=self.warehouse,
            image_url=self.image_url,
            image_public_id=self.image_public_id,
        )

    def validate(self) -> None:
        if not self.description.strip():
            raise ValidationError("description", "Description is required")

    def submit(self, db: Session) -> SubmitResult:
        try:
            self.validate()
        except ValidationError as e:
            return self._fail("validation", e.message)

        data = self.fields()
        try:
            if self.mode == FormMode.CREATE:
                item_id = record_gateway.create_item(db, data)
            else:
                record_gateway.update_item(db, self.record_id, InventoryItemUpdate(**data.model_dump()))
                item_id = self.record_id
        except NotFoundError as e:
            logger.error("Error saving item: %s", e)
            return self._fail("not_found", "Item not found")
        except PersistenceError as e:
            logger.error("Error saving item: %s", e)
            return self._fail("persistence", e.user_message)

        self.error = None
        message = "Item created" if self.mode == FormMode.CREATE else "Item updated"
        return SubmitResult(ok=True, message=message, id=item_id)

    def _fail(self, kind: str, message: str) -> SubmitResult:
        self.error = message
        return SubmitResult(ok=False, message=message, id=self.record_id, error=kind)
