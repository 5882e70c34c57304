"""Append log records to bucket files.

Small records are written with a single unsynchronized ``O_APPEND`` write:
the kernel never interleaves appends below ``PIPE_BUF`` bytes, so concurrent
writers cannot tear them. Large records go to a separate ``_big`` file and
are written while holding an exclusive, non-blocking ``flock`` on the handle.
"""

from __future__ import annotations

import fcntl
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .config import FILE_PERMISSION
from .errors import FileLockedError, WriteError

LOGGER = logging.getLogger(__name__)

_OPEN_FLAGS = os.O_WRONLY | os.O_APPEND | os.O_CREAT


@dataclass(frozen=True)
class LogMessage:
    """A record bound to its target file at submission time."""

    file_path: Path
    message: str
    is_large_data: bool = False


@contextmanager
def override_umask(mask: int = 0) -> Iterator[int]:
    """Apply ``mask`` as the process umask and restore the previous one on exit."""

    previous = os.umask(mask)
    try:
        yield previous
    finally:
        os.umask(previous)


def encode_record(message: str, line_terminator: str = os.linesep) -> bytes:
    return f"{message}{line_terminator}".encode("utf-8")


def write_message(
    message: LogMessage,
    *,
    file_mode: int = FILE_PERMISSION,
    line_terminator: str = os.linesep,
) -> None:
    """Append ``message`` to its file.

    Raises :class:`FileLockedError` when a large record's file is locked by
    another writer and :class:`WriteError` for every other failure.
    """

    data = encode_record(message.message, line_terminator)
    with override_umask(0):
        if message.is_large_data:
            _append_with_lock(Path(message.file_path), data, file_mode)
        else:
            _append(Path(message.file_path), data, file_mode)


def _open(file_path: Path, file_mode: int) -> int:
    try:
        return os.open(file_path, _OPEN_FLAGS, file_mode)
    except OSError as exc:
        raise WriteError(f"Can not open file \"{file_path}\". Error: {exc}") from exc


def _close(fd: int, file_path: Path) -> None:
    try:
        os.close(fd)
    except OSError as exc:
        raise WriteError(f"Can not close file \"{file_path}\". Error: {exc}") from exc


def _discard(fd: int, file_path: Path) -> None:
    try:
        os.close(fd)
    except OSError:
        LOGGER.debug("Unable to close %s after a failure", file_path)


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def _append(file_path: Path, data: bytes, file_mode: int) -> None:
    fd = _open(file_path, file_mode)
    try:
        # One write call: partial writes would defeat the append atomicity.
        written = os.write(fd, data)
    except OSError as exc:
        _discard(fd, file_path)
        raise WriteError(f"Can not write to file \"{file_path}\". Error: {exc}") from exc
    _close(fd, file_path)
    if written != len(data):
        raise WriteError(
            f"Short write to file \"{file_path}\": {written} of {len(data)} bytes"
        )


def _append_with_lock(file_path: Path, data: bytes, file_mode: int) -> None:
    fd = _open(file_path, file_mode)
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError as exc:
        _discard(fd, file_path)
        raise FileLockedError(f"Can not lock file \"{file_path}\"") from exc
    except OSError as exc:
        _discard(fd, file_path)
        raise WriteError(f"Can not lock file \"{file_path}\". Error: {exc}") from exc

    try:
        _write_all(fd, data)
    except OSError as exc:
        try:
            fcntl.flock(fd, fcntl.LOCK_UN)
        except OSError:
            LOGGER.debug("Unable to unlock %s after a failed write", file_path)
        _discard(fd, file_path)
        raise WriteError(f"Can not write to file \"{file_path}\". Error: {exc}") from exc

    try:
        fcntl.flock(fd, fcntl.LOCK_UN)
    except OSError as exc:
        _discard(fd, file_path)
        raise WriteError(f"Couldn't unlock file \"{file_path}\"") from exc
    _close(fd, file_path)


__all__ = ["LogMessage", "encode_record", "override_umask", "write_message"]
