from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Inventory Manager"
    DATABASE_URL: str = "sqlite:///./inventory.db"

    LOG_LEVEL: str = "INFO"

    # Cloudinary media host
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "inventory"

    # Upload limits (single file)
    MAX_IMAGE_BYTES: int = 5_000_000
    ALLOWED_IMAGE_FORMATS: str = "jpg,jpeg,png,webp"

    # Report output
    EXPORT_BASENAME: str = "inventory"
    DATE_FORMAT: str = "%m/%d/%Y"
    DATETIME_FORMAT: str = "%m/%d/%Y, %I:%M:%S %p"

    model_config = {"env_file": ".env"}

    @property
    def allowed_image_formats(self) -> set[str]:
        return {f.strip().lower() for f in self.ALLOWED_IMAGE_FORMATS.split(",") if f.strip()}


settings = Settings()
