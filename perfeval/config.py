"""Application configuration."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    database_url: str = "sqlite+aiosqlite:///./data/evaluations.db"

    @field_validator("database_url", mode="after")
    @classmethod
    def normalize_db_url(cls, v: str) -> str:
        """Ensure sqlite+aiosqlite scheme (plain sqlite:// uses the sync driver)."""
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    # Full database copy, written at startup and again at shutdown
    snapshot_path: Path | None = None
    upload_dir: Path = Path("./uploads")
    static_dir: Path = Path("./public")
    max_photo_bytes: int = 5 * 1024 * 1024
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000


settings = Settings()
