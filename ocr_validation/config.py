"""
Application configuration using pydantic-settings.

Loads configuration from environment variables with sensible defaults.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # File Storage
    export_dir: Path = Path("./exports")
    max_upload_size_mb: int = 10

    # Application
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    # OCR Settings
    tesseract_cmd: Optional[str] = None
    ocr_language: str = "eng"
    ocr_resolution: int = 108  # 1.5x render scale of a 72 dpi page
    ocr_max_confidence: float = 0.99

    @property
    def max_upload_size_bytes(self) -> int:
        """Get maximum upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
