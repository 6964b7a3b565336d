"""
Configuration helpers for the labelhub backend.

Settings are read once per process; the backend flag and the data directory
are fixed at startup and treated as read-only afterwards.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    use_remote_backend: bool
    data_dir: Path
    database_url: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        use_remote_backend=_bool(os.getenv("LABELHUB_USE_DATABASE"), False),
        data_dir=Path(os.getenv("LABELHUB_DATA_DIR") or "data"),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
