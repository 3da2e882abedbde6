"""Configuration, logging, exceptions and file helpers shared by the physics packages."""

from __future__ import annotations

from datetime import datetime


def pathSafeTime(dt: datetime | None = None) -> str:
    """Return a time stamp of `dt` (default: now) that is safe to embed in a file name."""
    if dt is None:
        dt = datetime.now()
    return dt.isoformat().replace(":", "-").replace(".", "")
