from fastapi import APIRouter, File, UploadFile

from inventory_app.config import settings
from inventory_app.schemas.inventory import ImageUploadOut
from inventory_app.services import media_service

router = APIRouter(prefix="/images", tags=["Images"])


@router.post("/upload", response_model=ImageUploadOut, status_code=201)
def upload_image(file: UploadFile = File(...)):
    """Upload one product photo to the media host.

    Returns the secure URL and the deletion handle to store on the record.
    """
    # One byte over the ceiling is enough to reject the file
    data = file.file.read(settings.MAX_IMAGE_BYTES + 1)
    return media_service.upload_image(data, file.filename or "")
