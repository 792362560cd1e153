from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_app.database import get_db, init_db
from inventory_app.main import app
from inventory_app.schemas.inventory import InventoryRecord, ItemStatus, Warehouse


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def engine():
    engine = _memory_engine()
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def broken_db():
    """A session whose store has no inventory table: every query fails."""
    engine = _memory_engine()
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_record():
    counter = iter(range(1, 10_000))

    def _make(**kwargs) -> InventoryRecord:
        n = next(counter)
        ts = kwargs.pop("created_at", datetime(2024, 1, n % 28 + 1, 12, 0, 0))
        data = {
            "id": f"rec{n:05d}-0000-4000-8000-000000000000",
            "description": f"Item {n}",
            "status": ItemStatus.NEW,
            "warehouse": Warehouse.WAREHOUSE_1,
            "created_at": ts,
            "updated_at": ts,
        }
        data.update(kwargs)
        return InventoryRecord(**data)

    return _make


@pytest.fixture
def fake_cloudinary(monkeypatch):
    """Replace the Cloudinary SDK calls. Records every call made."""
    import cloudinary.uploader

    calls = {"upload": [], "destroy": []}

    def upload(file, **options):
        calls["upload"].append(options)
        n = len(calls["upload"])
        return {
            "secure_url": f"https://res.cloudinary.com/demo/image/upload/inventory/photo{n}.png",
            "public_id": f"inventory/photo{n}",
        }

    def destroy(public_id, **options):
        calls["destroy"].append(public_id)
        return {"result": "ok"}

    monkeypatch.setattr(cloudinary.uploader, "upload", upload)
    monkeypatch.setattr(cloudinary.uploader, "destroy", destroy)
    return calls
