from datetime import datetime
from enum import Enum as PyEnum
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator


class ItemStatus(str, PyEnum):
    NEW = "new"
    USED = "used"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class Warehouse(str, PyEnum):
    WAREHOUSE_1 = "warehouse_1"
    WAREHOUSE_2 = "warehouse_2"
    WAREHOUSE_3 = "warehouse_3"

    @property
    def label(self) -> str:
        return WAREHOUSE_LABELS[self]


# Display names for reports and the UI. Every enum member has an entry.
STATUS_LABELS: dict[ItemStatus, str] = {
    ItemStatus.NEW: "New",
    ItemStatus.USED: "Used",
}

WAREHOUSE_LABELS: dict[Warehouse, str] = {
    Warehouse.WAREHOUSE_1: "Main Warehouse",
    Warehouse.WAREHOUSE_2: "Secondary Warehouse",
    Warehouse.WAREHOUSE_3: "External Warehouse",
}

ALL = "all"

StatusFilter = Literal["all", "new", "used"]
WarehouseFilter = Literal["all", "warehouse_1", "warehouse_2", "warehouse_3"]
ExportScope = Literal["all", "filtered"]


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _check_image_pair(image_url: str | None, image_public_id: str | None) -> None:
    if (image_url is None) != (image_public_id is None):
        raise ValueError("image_url and image_public_id must be set together")


# --- Record ---

class InventoryRecord(BaseModel):
    id: str
    description: str
    status: ItemStatus
    warehouse: Warehouse
    image_url: str | None = None
    image_public_id: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def has_image(self) -> bool:
        return self.image_url is not None


# --- Write payloads ---

class InventoryItemCreate(BaseModel):
    """Editable fields of a record, as submitted by the form.

    ``description`` is not constrained here: blank descriptions are
    rejected by the form controller before the store is called.
    """

    description: str = ""
    status: ItemStatus = ItemStatus.NEW
    warehouse: Warehouse = Warehouse.WAREHOUSE_1
    image_url: str | None = None
    image_public_id: str | None = None

    @field_validator("image_url", "image_public_id", mode="before")
    @classmethod
    def empty_image_is_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def image_pair(self):
        _check_image_pair(self.image_url, self.image_public_id)
        return self


class InventoryItemUpdate(BaseModel):
    description: str | None = None
    status: ItemStatus | None = None
    warehouse: Warehouse | None = None
    image_url: str | None = None
    image_public_id: str | None = None

    @field_validator("image_url", "image_public_id", mode="before")
    @classmethod
    def empty_image_is_none(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def image_pair(self):
        sent = {"image_url", "image_public_id"} & self.model_fields_set
        if len(sent) == 1:
            raise ValueError("image_url and image_public_id must be updated together")
        if sent:
            _check_image_pair(self.image_url, self.image_public_id)
        for field in ("description", "status", "warehouse"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


# --- Read models ---

class InventoryStats(BaseModel):
    total: int = 0
    new: int = 0
    used: int = 0
    with_image: int = 0
    without_image: int = 0
    by_warehouse: dict[str, int] = {}


class InventoryListOut(BaseModel):
    items: list[InventoryRecord]
    stats: InventoryStats
    total: int
    shown: int


class SubmitResult(BaseModel):
    ok: bool
    message: str
    id: str | None = None
    error: str | None = None  # validation, not_found, persistence


class ImageUploadOut(BaseModel):
    image_url: str
    image_public_id: str
