"""Domain records, error kinds and static labeling configuration."""

from .errors import (
    BackendUnavailableError,
    DecodeError,
    InvalidArgumentError,
    NotFoundError,
    StorageError,
    WriteError,
)
from .models import (
    Assignment,
    Attribute,
    Category,
    DashboardContents,
    Project,
    ProjectNameCheck,
    ProjectOptions,
    Task,
)

__all__ = [
    "Assignment",
    "Attribute",
    "BackendUnavailableError",
    "Category",
    "DashboardContents",
    "DecodeError",
    "InvalidArgumentError",
    "NotFoundError",
    "Project",
    "ProjectNameCheck",
    "ProjectOptions",
    "StorageError",
    "Task",
    "WriteError",
]
