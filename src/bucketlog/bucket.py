"""Minute-granularity file names for the log collector."""

from __future__ import annotations

from datetime import datetime

LOG_SUFFIX = ".log"
LARGE_SUFFIX = "_big"


def bucket_name(now: datetime) -> str:
    """Return ``YYYYMMDDhhmm00`` for ``now``.

    Seconds are always rendered as ``00`` so every instant of a calendar
    minute maps to the same bucket.
    """

    return (
        f"{now.year:04d}{now.month:02d}{now.day:02d}"
        f"{now.hour:02d}{now.minute:02d}00"
    )


def file_name(now: datetime, large: bool = False) -> str:
    name = bucket_name(now)
    if large:
        name += LARGE_SUFFIX
    return name + LOG_SUFFIX


__all__ = ["LARGE_SUFFIX", "LOG_SUFFIX", "bucket_name", "file_name"]
