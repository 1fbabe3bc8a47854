"""Filesystem timestamp queries."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from typing import Optional

from .models import FileTimestamps


def _to_datetime(value: Optional[float]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


def timestamps_from_stat(stat: os.stat_result) -> FileTimestamps:
    """Convert an already collected ``os.stat_result`` into timestamps.

    Args:
        stat: Result of ``os.stat`` for the file.

    Returns:
        FileTimestamps: Aware UTC datetimes; unreported fields are None.
    """
    changed: Optional[float] = None
    created: Optional[float] = getattr(stat, "st_birthtime", None)
    if sys.platform == "win32":
        if created is None:
            created = stat.st_ctime
    else:
        changed = stat.st_ctime

    return FileTimestamps(
        modified=_to_datetime(stat.st_mtime),
        accessed=_to_datetime(stat.st_atime),
        changed=_to_datetime(changed),
        created=_to_datetime(created),
    )


def read_timestamps(path: str | os.PathLike[str]) -> FileTimestamps:
    """Return modification, access, change, and birth times for ``path``.

    Change and birth times are left as None where the platform does not
    report them. On Windows ``st_ctime`` is the creation time, so it feeds
    ``created`` rather than ``changed``. On Linux ``os.stat`` exposes no
    birth time (it is only reachable through ``statx``), so ``created`` is
    always None there; macOS and the BSDs report it as ``st_birthtime``.

    Raises:
        OSError: If the path cannot be stat'ed.
    """
    return timestamps_from_stat(os.stat(path))


__all__ = ["read_timestamps", "timestamps_from_stat"]
