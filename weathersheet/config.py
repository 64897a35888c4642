from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EXCEL_CONTENT_TYPES = [
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",  # .xlsx
    "application/vnd.ms-excel",  # .xls
]


class Settings(BaseSettings):
    """
    Runtime configuration, read from ``WEATHERSHEET_*`` environment variables
    or an optional ``.env`` file.
    """

    log_level: str = "INFO"
    log_json: bool = False

    # Uploads are buffered in memory, so cap their size
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)
    accepted_content_types: list[str] = Field(
        default_factory=lambda: list(EXCEL_CONTENT_TYPES)
    )

    csv_decimals: int = Field(default=4, ge=0, le=12)
    preview_rows: int = Field(default=10, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="WEATHERSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

