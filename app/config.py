"""
Application settings.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Notion
    NOTION_TOKEN: str = ""
    NOTION_DATABASE_ID: str = ""
    NOTION_API_URL: str = "https://api.notion.com/v1"
    NOTION_VERSION: str = "2022-06-28"
    NOTION_TIMEOUT: float = 30.0

    # Shared secret for the ingest endpoint (empty = disabled)
    INGEST_API_KEY: str = ""

    # Uploads
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024  # single-part upload ceiling
    JPEG_QUALITY: int = 90

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
