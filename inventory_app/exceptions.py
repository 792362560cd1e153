class InventoryError(Exception):
    """Base class for inventory errors."""


class ValidationError(InventoryError):
    """A required form field is blank. Raised before any store call."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class NotFoundError(InventoryError):
    def __init__(self, item_id: str):
        super().__init__(f"Inventory item {item_id} not found")
        self.item_id = item_id


class PersistenceError(InventoryError):
    """The record store was unreachable, rejected a write, or returned garbage."""

    MESSAGES = {
        "create": "Could not create the item",
        "list": "Could not load the inventory",
        "get": "Could not load the item",
        "update": "Could not update the item",
        "delete": "Could not delete the item",
    }

    def __init__(self, action: str, detail: str = ""):
        super().__init__(f"{action} failed: {detail}" if detail else f"{action} failed")
        self.action = action
        self.detail = detail

    @property
    def user_message(self) -> str:
        return self.MESSAGES.get(self.action, "Inventory store error")


class MediaUploadError(InventoryError):
    """An image was rejected or the media host refused the upload."""


class MediaCleanupError(InventoryError):
    """Best-effort image deletion failed. Never propagated past the delete flow."""

    def __init__(self, public_id: str, detail: str = ""):
        super().__init__(f"Could not delete image {public_id}: {detail}")
        self.public_id = public_id
