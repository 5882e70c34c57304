"""Delayed replay of messages whose bucket file was locked."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Optional, Tuple

from .config import RETRY_DELAY
from .errors import FileLockedError, LogError
from .writer import LogMessage

LOGGER = logging.getLogger(__name__)

Writer = Callable[[LogMessage], None]
DropCallback = Callable[[LogMessage, Exception], None]


class RetryQueue:
    """FIFO of lock-contended messages replayed one per tick.

    At most one retry task is pending at a time. Each tick waits ``delay``
    seconds, pops the head message and writes it; a message that finds the
    file still locked goes back to the head so the original order survives.
    The queue goes idle once it is empty.
    """

    def __init__(
        self,
        writer: Writer,
        *,
        delay: float = RETRY_DELAY,
        on_drop: Optional[DropCallback] = None,
    ) -> None:
        self._writer = writer
        self.delay = delay
        self._on_drop = on_drop
        self._messages: Deque[LogMessage] = deque()
        self._timer: Optional[asyncio.Task[None]] = None

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def pending(self) -> int:
        return len(self._messages)

    @property
    def scheduled(self) -> bool:
        return self._timer is not None

    def snapshot(self) -> Tuple[LogMessage, ...]:
        return tuple(self._messages)

    def enqueue(self, message: LogMessage) -> None:
        """Queue ``message`` at the tail and make sure a retry tick is pending.

        Must be called from a running event loop.
        """

        self._messages.append(message)
        self._schedule()

    async def drain(self) -> None:
        """Wait until every queued message was written or dropped."""

        while self._timer is not None:
            await self._timer

    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        if not self._messages:
            self._timer = None
            return
        if self._timer is not None:
            return
        self._timer = asyncio.get_running_loop().create_task(self._tick())

    async def _tick(self) -> None:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self._timer = None
            raise
        message = self._messages.popleft()
        try:
            self._writer(message)
        except FileLockedError:
            self._messages.appendleft(message)
            LOGGER.warning(
                "Retry write deferred: file \"%s\" is still locked (%d queued)",
                message.file_path,
                len(self._messages),
            )
        except LogError as exc:
            LOGGER.error("Dropping message for \"%s\": %s", message.file_path, exc)
            self._report_drop(message, exc)
        except Exception as exc:
            LOGGER.exception("Unexpected failure writing \"%s\"", message.file_path)
            self._report_drop(message, exc)
        finally:
            self._timer = None
            self._schedule()

    def _report_drop(self, message: LogMessage, error: Exception) -> None:
        if self._on_drop is None:
            return
        try:
            self._on_drop(message, error)
        except Exception:
            LOGGER.exception("Drop callback failed for \"%s\"", message.file_path)


__all__ = ["DropCallback", "RetryQueue", "Writer"]
