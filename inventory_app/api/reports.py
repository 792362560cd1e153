from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory_app.database import get_db
from inventory_app.schemas.inventory import InventoryStats
from inventory_app.services.inventory_collection import RecordCollection

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/inventory", response_model=InventoryStats)
def inventory_report(db: Session = Depends(get_db)):
    return RecordCollection.load(db).stats
