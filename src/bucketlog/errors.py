"""Exception hierarchy raised by the bucket logger."""

from __future__ import annotations


class LogError(RuntimeError):
    """Base class for every failure raised while writing a log message."""


class DirectoryError(LogError):
    """Raised when the target directory cannot be created or written to."""


class WriteError(LogError):
    """Raised when a log file cannot be opened, written, unlocked or closed."""


class FileLockedError(WriteError):
    """Raised when another writer holds the advisory lock on a ``_big`` file.

    This is the only recoverable write failure: the message is handed to the
    retry queue instead of being reported to the caller.
    """


__all__ = ["DirectoryError", "FileLockedError", "LogError", "WriteError"]
