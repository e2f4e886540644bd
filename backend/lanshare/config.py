"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config comes from env vars or .env.lanshare file."""

    FILE_STORAGE_PATH: str = "./uploads"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    PUBLIC_URL: str = ""  # overrides the discovered LAN address when set
    CORS_ORIGINS: str = "*"

    # Uploads / live channel
    UPLOAD_CHUNK_SIZE: int = 1024 * 1024
    LIVE_QUEUE_SIZE: int = 100

    LOG_LEVEL: str = "INFO"
    PRINT_QR: bool = True
    STATIC_DIR: str = ""  # empty = packaged front-end

    class Config:
        env_file = ".env.lanshare"
        env_file_encoding = "utf-8"


settings = Settings()
