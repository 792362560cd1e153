import logging
from datetime import datetime
from typing import Literal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from inventory_app.database import get_db
from inventory_app.exceptions import ValidationError
from inventory_app.schemas.inventory import (
    ExportScope,
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryListOut,
    InventoryRecord,
    StatusFilter,
    SubmitResult,
    WarehouseFilter,
)
from inventory_app.services import export_service, media_service, record_gateway
from inventory_app.services.inventory_collection import RecordCollection
from inventory_app.services.inventory_form import InventoryForm

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory"])

ERROR_STATUS = {"validation": 422, "not_found": 404, "persistence": 503}


def _check(result: SubmitResult) -> SubmitResult:
    if not result.ok:
        raise HTTPException(ERROR_STATUS.get(result.error, 400), result.message)
    return result


@router.post("", response_model=SubmitResult, status_code=201)
def create_item(data: InventoryItemCreate, db: Session = Depends(get_db)):
    form = InventoryForm()
    form.populate(data)
    return _check(form.submit(db))


@router.get("", response_model=InventoryListOut)
def list_items(
    q: str = "",
    status: StatusFilter = "all",
    warehouse: WarehouseFilter = "all",
    db: Session = Depends(get_db),
):
    collection = RecordCollection.load(db)
    items = collection.view(q, status, warehouse)
    return InventoryListOut(items=items, stats=collection.stats, total=len(collection), shown=len(items))


@router.get("/export/{fmt}")
def export_items(
    fmt: Literal["xlsx", "pdf"],
    scope: ExportScope = "all",
    q: str = "",
    status: StatusFilter = "all",
    warehouse: WarehouseFilter = "all",
    db: Session = Depends(get_db),
):
    """Download the whole inventory, or the filtered view, as a report file."""
    collection = RecordCollection.load(db)
    records = collection.view(q, status, warehouse) if scope == "filtered" else list(collection)

    now = datetime.now()
    filename = export_service.export_filename(fmt, now.date())
    if fmt == "xlsx":
        content = export_service.export_xlsx(records, now)
        media_type = export_service.XLSX_MEDIA_TYPE
    else:
        content = export_service.export_pdf(records, now)
        media_type = export_service.PDF_MEDIA_TYPE
    logger.info("Exported %d items to %s", len(records), filename)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{item_id}", response_model=InventoryRecord)
def get_item(item_id: str, db: Session = Depends(get_db)):
    return record_gateway.get_item(db, item_id)


@router.put("/{item_id}", response_model=SubmitResult)
def replace_item(item_id: str, data: InventoryItemCreate, db: Session = Depends(get_db)):
    """Edit form submit: every editable field is replaced."""
    form = InventoryForm(record_gateway.get_item(db, item_id))
    form.populate(data)
    return _check(form.submit(db))


@router.patch("/{item_id}", response_model=SubmitResult)
def update_item(item_id: str, data: InventoryItemUpdate, db: Session = Depends(get_db)):
    if "description" in data.model_fields_set and not data.description.strip():
        raise ValidationError("description", "Description is required")
    record_gateway.update_item(db, item_id, data)
    return SubmitResult(ok=True, message="Item updated", id=item_id)


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: str,
    background_tasks: BackgroundTasks,
    confirm: bool = False,
    db: Session = Depends(get_db),
):
    if not confirm:
        raise HTTPException(400, "Deletion must be confirmed")
    public_id = record_gateway.delete_item(db, item_id)
    if public_id:
        # Detached: a failed image cleanup never affects the deletion
        background_tasks.add_task(media_service.discard_image, public_id)
