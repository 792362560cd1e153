import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inventory_app.database import Base


class InventoryItem(Base):
    """Stored document for one inventory record.

    Columns keep the record store's wire vocabulary: ``status`` holds
    ``disponible``/``en_transito`` and ``warehouse`` holds ``bodega_1..3``.
    Timestamps are naive UTC and may be missing on rows written by older
    clients.
    """

    __tablename__ = "inventory"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)  # disponible, en_transito
    warehouse: Mapped[str] = mapped_column(String, nullable=False)  # bodega_1, bodega_2, bodega_3
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    image_public_id: Mapped[str | None] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
