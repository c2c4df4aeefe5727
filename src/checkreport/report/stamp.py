"""Version and start-time line printed at the top of a report."""

from __future__ import annotations

from datetime import datetime
from importlib import metadata as importlib_metadata


def get_version() -> str:
    """Return installed package version if available, else 'unknown'."""
    try:
        return importlib_metadata.version("checkreport")
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def version_stamp(started: datetime | None = None) -> str:
    started = started or datetime.now().astimezone()
    return f"checkreport version {get_version()}  started {started:%a %b %d %H:%M:%S %Z %Y}"
