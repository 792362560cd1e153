import pytest

from inventory_app.exceptions import PersistenceError, ValidationError
from inventory_app.schemas.inventory import InventoryItemCreate, ItemStatus, Warehouse
from inventory_app.services import record_gateway
from inventory_app.services.inventory_form import FormMode, InventoryForm


def _fail_if_called(*args, **kwargs):
    raise AssertionError("store must not be called")


def test_new_form_is_create_mode():
    form = InventoryForm()
    assert form.mode == FormMode.CREATE
    assert form.record_id is None
    assert form.status == ItemStatus.NEW
    assert form.warehouse == Warehouse.WAREHOUSE_1


@pytest.mark.parametrize("description", ["", "   ", "\t\n"])
def test_blank_description_is_rejected_without_store_call(db, monkeypatch, description):
    monkeypatch.setattr(record_gateway, "create_item", _fail_if_called)
    form = InventoryForm()
    form.populate(InventoryItemCreate(description=description, status="used"))

    result = form.submit(db)

    assert not result.ok
    assert result.error == "validation"
    assert result.message == "Description is required"
    assert form.error == "Description is required"
    assert form.status == ItemStatus.USED


def test_validate_raises_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        InventoryForm().validate()
    assert exc_info.value.field == "description"


def test_create_submit(db):
    form = InventoryForm()
    form.populate(InventoryItemCreate(description="Label printer", warehouse="warehouse_3"))

    result = form.submit(db)

    assert result.ok
    assert result.message == "Item created"
    record = record_gateway.get_item(db, result.id)
    assert record.description == "Label printer"
    assert record.warehouse == Warehouse.WAREHOUSE_3


def test_edit_submit_replaces_all_fields(db):
    item_id = record_gateway.create_item(
        db,
        InventoryItemCreate(description="Camera", image_url="https://img/c.png", image_public_id="inventory/c"),
    )
    original = record_gateway.get_item(db, item_id)

    form = InventoryForm(original)
    assert form.mode == FormMode.EDIT
    assert form.description == "Camera"
    form.description = "Camera (boxed)"
    form.status = ItemStatus.USED
    form.remove_image()
    result = form.submit(db)

    assert result.ok
    assert result.message == "Item updated"
    assert result.id == item_id
    updated = record_gateway.get_item(db, item_id)
    assert updated.description == "Camera (boxed)"
    assert updated.status == ItemStatus.USED
    assert updated.image_url is None
    assert updated.created_at == original.created_at
    assert updated.updated_at > original.updated_at


def test_set_image_stages_both_handles():
    form = InventoryForm()
    form.set_image("https://img/a.png", "inventory/a")
    data = form.fields()
    assert (data.image_url, data.image_public_id) == ("https://img/a.png", "inventory/a")


def test_store_failure_keeps_form_populated(db, monkeypatch):
    def broken_create(db, data):
        raise PersistenceError("create", "connection refused")

    monkeypatch.setattr(record_gateway, "create_item", broken_create)
    form = InventoryForm()
    form.populate(InventoryItemCreate(description="Router", status="used", warehouse="warehouse_2"))

    result = form.submit(db)

    assert not result.ok
    assert result.error == "persistence"
    assert result.message == "Could not create the item"
    assert "connection refused" not in result.message
    assert (form.description, form.status, form.warehouse) == ("Router", ItemStatus.USED, Warehouse.WAREHOUSE_2)


def test_edit_of_deleted_record_reports_not_found(db):
    item_id = record_gateway.create_item(db, InventoryItemCreate(description="Tripod"))
    form = InventoryForm(record_gateway.get_item(db, item_id))
    record_gateway.delete_item(db, item_id)

    result = form.submit(db)

    assert not result.ok
    assert result.error == "not_found"
    assert form.description == "Tripod"
