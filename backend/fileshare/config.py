"""Application configuration from environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """All config comes from env vars or .env file."""

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Storage
    UPLOADS_DIR: str = "./uploads"
    FILES_DB_PATH: str = "./files.json"
    PUBLIC_DIR: str = str(PACKAGE_DIR / "public")

    # Uploads
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MiB
    UPLOAD_CHUNK_SIZE: int = 64 * 1024
    UPLOAD_DATE_FORMAT: str = "%d.%m.%Y, %H:%M:%S"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
