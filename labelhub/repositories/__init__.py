"""
Persistence adapters.

Two interchangeable backends implement ``StorageBackend``: JSON files under a
data directory, and SQL tables reached through SQLAlchemy. The process builds
exactly one of them at startup from ``Settings.use_remote_backend``.
"""

from __future__ import annotations

import logging

from labelhub.core.config import Settings, get_settings

from .base import StorageBackend, assignment_key
from .file_storage import FileStorageBackend
from .sql_repository import SQLStorageBackend

__all__ = [
    "StorageBackend",
    "FileStorageBackend",
    "SQLStorageBackend",
    "assignment_key",
    "get_storage_backend",
]

logger = logging.getLogger(__name__)


def get_storage_backend(settings: Settings | None = None) -> StorageBackend:
    """Build the backend selected by configuration.

    Raises:
        RuntimeError: If the remote backend is selected without DATABASE_URL.
    """
    settings = settings or get_settings()
    if settings.use_remote_backend:
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL must be configured to use the remote backend.")
        logger.info("Using remote storage backend")
        return SQLStorageBackend(settings.database_url)
    logger.info("Using local storage backend at %s", settings.data_dir)
    return FileStorageBackend(settings.data_dir)
