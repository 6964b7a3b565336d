"""Error kinds raised by the storage backends and accessors."""
from __future__ import annotations


class StorageError(Exception):
    """Base exception for the data access layer.

    ``entity`` names the record type (project, task, assignment, submission)
    and ``key`` the identity that failed, when known.
    """

    def __init__(self, message: str, *, entity: str | None = None, key: str | None = None):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.key = key


class NotFoundError(StorageError):
    """Raised when a project, task, assignment or submission does not exist."""


class DecodeError(StorageError):
    """Raised when a stored record cannot be parsed into its domain type."""


class InvalidArgumentError(StorageError):
    """Raised for malformed caller input (empty project name, non-numeric index)."""


class WriteError(StorageError):
    """Raised when the backend rejects a write."""


class BackendUnavailableError(StorageError):
    """Raised for I/O or connection failures surfaced by the backend."""
