"""Public entry points: route messages to their bucket file."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from .bucket import file_name
from .config import LoggerConfig
from .directory import ensure_directory
from .errors import FileLockedError
from .retry import DropCallback, RetryQueue
from .writer import LogMessage, write_message

LOGGER = logging.getLogger(__name__)


class BucketLogger:
    """Append messages to minute-bucketed files under a directory.

    Messages larger than ``config.max_message_size`` bytes go to a ``_big``
    file guarded by an advisory lock. When that lock is held elsewhere the
    message is queued and replayed later; :meth:`submit` still returns
    normally, so a successful call means "accepted", not "written".
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        retry_queue: Optional[RetryQueue] = None,
        on_drop: Optional[DropCallback] = None,
    ) -> None:
        self.config = config or LoggerConfig()
        self._clock = clock or datetime.now
        self.retry_queue = retry_queue or RetryQueue(
            self.write,
            delay=self.config.retry_delay,
            on_drop=on_drop,
        )

    @property
    def pending(self) -> int:
        return self.retry_queue.pending

    def serialize(self, payload: Any) -> str:
        if isinstance(payload, str):
            return payload
        return self.config.serializer(payload)

    def build_message(self, directory: Path, message: str) -> LogMessage:
        size = len(message.encode("utf-8"))
        is_large_data = size > self.config.max_message_size
        target = Path(directory) / file_name(self._clock(), large=is_large_data)
        return LogMessage(file_path=target, message=message, is_large_data=is_large_data)

    def write(self, message: LogMessage) -> None:
        write_message(
            message,
            file_mode=self.config.file_mode,
            line_terminator=self.config.line_terminator,
        )

    async def submit(self, directory: Path, payload: Any) -> None:
        """Write ``payload`` to the current bucket file in ``directory``.

        ``payload`` is written verbatim when it is a ``str`` and serialized
        with ``config.serializer`` otherwise. Raises
        :class:`~bucketlog.errors.DirectoryError` or
        :class:`~bucketlog.errors.WriteError`; a locked file is never an
        error for the caller.
        """

        directory = ensure_directory(Path(directory), self.config.directory_mode)
        log_message = self.build_message(directory, self.serialize(payload))
        try:
            self.write(log_message)
        except FileLockedError:
            LOGGER.warning(
                "File \"%s\" is locked; message queued for retry", log_message.file_path
            )
            self.retry_queue.enqueue(log_message)

    async def write_log(self, directory: Path, message: str) -> None:
        await self.submit(directory, message)

    async def write_json(self, directory: Path, record: Any) -> None:
        await self.submit(directory, self.config.serializer(record))

    async def drain(self) -> None:
        await self.retry_queue.drain()

    async def __aenter__(self) -> "BucketLogger":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.drain()


_default_logger: Optional[BucketLogger] = None


def get_default_logger() -> BucketLogger:
    global _default_logger
    if _default_logger is None:
        _default_logger = BucketLogger()
    return _default_logger


async def write_log(directory: Path, message: str) -> None:
    """Append ``message`` using the shared module-level logger."""

    await get_default_logger().write_log(directory, message)


async def write_json(directory: Path, record: Any) -> None:
    """Append ``record`` as one JSON line using the shared module-level logger."""

    await get_default_logger().write_json(directory, record)


__all__ = ["BucketLogger", "get_default_logger", "write_json", "write_log"]
