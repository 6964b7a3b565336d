"""
Utility helpers shared across repositories/services.
"""

from datetime import datetime, timezone
from pathlib import PurePosixPath
import time

TIME_FORMAT = "%Y-%m-%d_%H-%M-%S"
ID_WIDTH = 4


def record_timestamp() -> int:
    """Current time in whole seconds since the epoch."""
    return int(time.time())


def format_time(timestamp: int) -> str:
    """
    Format an epoch timestamp as ``YYYY-MM-DD_hh-mm-ss``.

    Uses a 24-hour clock in UTC so that the result sorts in the same order as
    the timestamps it was built from.
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(TIME_FORMAT)


def format_id(value: int) -> str:
    """Zero-pad a non-negative integer to at least four digits (never truncates)."""
    if value < 0:
        raise ValueError(f"id must be non-negative, got {value}")
    return str(value).zfill(ID_WIDTH)


def path_stem(path: str) -> str:
    """
    Return the last path component without its final ``.extension``.

    ``path_stem("a/b/file.tar.gz") == "file.tar"``; names without a dot are
    returned unchanged.
    """
    name = PurePosixPath(path).name
    dot = name.rfind(".")
    if dot < 0:
        return name
    return name[:dot]
