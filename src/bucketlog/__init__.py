"""Minute-bucketed, append-only log files for a streaming log collector."""

from .bucket import bucket_name, file_name
from .config import LoggerConfig
from .directory import ensure_directory
from .errors import DirectoryError, FileLockedError, LogError, WriteError
from .logger import BucketLogger, get_default_logger, write_json, write_log
from .retry import RetryQueue
from .writer import LogMessage, override_umask, write_message

__all__ = [
    "BucketLogger",
    "DirectoryError",
    "FileLockedError",
    "LogError",
    "LogMessage",
    "LoggerConfig",
    "RetryQueue",
    "WriteError",
    "bucket_name",
    "ensure_directory",
    "file_name",
    "get_default_logger",
    "override_umask",
    "write_json",
    "write_log",
    "write_message",
]
