"""Runtime settings for :class:`~bucketlog.logger.BucketLogger`."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Callable

# PIPE_BUF on Linux: appends up to this size cannot be torn by other writers.
MAX_MESSAGE_SIZE = 4096
FILE_PERMISSION = 0o666
DIRECTORY_PERMISSION = 0o777
RETRY_DELAY = 0.1


def serialize_json(record: Any) -> str:
    """Serialize ``record`` to a single compact JSON line."""

    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class LoggerConfig:
    """Tunable limits and formats used by the bucket logger."""

    max_message_size: int = MAX_MESSAGE_SIZE
    file_mode: int = FILE_PERMISSION
    directory_mode: int = DIRECTORY_PERMISSION
    retry_delay: float = RETRY_DELAY
    line_terminator: str = os.linesep
    serializer: Callable[[Any], str] = serialize_json

    def __post_init__(self) -> None:
        if self.max_message_size <= 0:
            raise ValueError("max_message_size must be a positive number of bytes")
        if self.retry_delay < 0:
            raise ValueError("retry_delay cannot be negative")
        for field_name in ("file_mode", "directory_mode"):
            value = getattr(self, field_name)
            if not 0 <= value <= 0o7777:
                raise ValueError(f"{field_name} must be a permission mask, got {value!r}")
        if not self.line_terminator:
            raise ValueError("line_terminator cannot be empty")


__all__ = [
    "DIRECTORY_PERMISSION",
    "FILE_PERMISSION",
    "LoggerConfig",
    "MAX_MESSAGE_SIZE",
    "RETRY_DELAY",
    "serialize_json",
]
