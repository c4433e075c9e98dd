"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
CacheBackendName = Literal["redis", "database", "none"]


class Settings(BaseSettings):
    """Application settings, configurable via environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Path("data")

    # Database (defaults to a SQLite file under data_dir)
    database_url: str = ""

    # Logging
    log_level: LogLevel = "INFO"
    log_file_enabled: bool = False
    log_file_path: Path | None = None
    log_file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_file_backup_count: int = 5

    @property
    def resolved_log_file_path(self) -> Path:
        """Return log file path, defaulting to data_dir/dictapi.log if not set."""
        return self.log_file_path or self.data_dir / "dictapi.log"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "dictionary.db"

    @property
    def resolved_database_url(self) -> str:
        """Return the SQLAlchemy URL, falling back to the SQLite file in data_dir."""
        return self.database_url or f"sqlite+aiosqlite:///{self.db_path}"

    # External dictionary
    dictionary_api_url: str = "https://api.dictionaryapi.dev/api/v2/entries/en"
    dictionary_timeout_seconds: float = 10.0

    # Definition cache
    cache_backend: CacheBackendName = "redis"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = 3600

    # Word list pagination
    page_size_default: int = 50
    page_size_max: int = 100


settings = Settings()
