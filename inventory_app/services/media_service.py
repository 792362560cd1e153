import io
import logging
import os

import cloudinary
import cloudinary.uploader
from PIL import Image, UnidentifiedImageError

from inventory_app.config import settings
from inventory_app.exceptions import MediaCleanupError, MediaUploadError
from inventory_app.schemas.inventory import ImageUploadOut

logger = logging.getLogger(__name__)

# Pillow format name -> file extension
PIL_FORMATS = {"JPEG": "jpg", "PNG": "png", "WEBP": "webp"}


def configure():
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def validate_image(data: bytes, filename: str = "") -> str:
    """Check size, extension and actual content. Returns the detected format."""
    allowed = settings.allowed_image_formats
    if not data:
        raise MediaUploadError("Image file is empty")
    if len(data) > settings.MAX_IMAGE_BYTES:
        raise MediaUploadError(f"Image size must be at most {settings.MAX_IMAGE_BYTES} bytes")

    ext = os.path.splitext(filename or "")[1].lower().lstrip(".")
    if ext and ext not in allowed:
        raise MediaUploadError(f"Allowed formats: {', '.join(sorted(allowed))}")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            fmt = (img.format or "").upper()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise MediaUploadError("File must be an image") from e

    kind = PIL_FORMATS.get(fmt)
    if kind is None or (kind not in allowed and not (kind == "jpg" and "jpeg" in allowed)):
        raise MediaUploadError(f"Allowed formats: {', '.join(sorted(allowed))}")
    return kind


def upload_image(data: bytes, filename: str = "") -> ImageUploadOut:
    validate_image(data, filename)
    try:
        result = cloudinary.uploader.upload(
            io.BytesIO(data),
            folder=settings.CLOUDINARY_FOLDER,
            resource_type="image",
            unique_filename=True,
            overwrite=False,
        )
    except Exception as e:
        logger.error("Image upload failed for %s: %s", filename, e)
        raise MediaUploadError("Image upload failed") from e
    logger.info("Uploaded image %s", result["public_id"])
    return ImageUploadOut(image_url=result["secure_url"], image_public_id=result["public_id"])


def delete_image(public_id: str) -> None:
    try:
        result = cloudinary.uploader.destroy(public_id, resource_type="image")
    except Exception as e:
        raise MediaCleanupError(public_id, str(e)) from e
    if result.get("result") != "ok":
        raise MediaCleanupError(public_id, f"media host answered {result.get('result')!r}")


def discard_image(public_id: str) -> None:
    """Best-effort cleanup after a record is deleted. Never raises."""
    try:
        delete_image(public_id)
    except MediaCleanupError as e:
        logger.warning("Image cleanup failed: %s", e)
        return
    logger.info("Deleted image %s", public_id)
