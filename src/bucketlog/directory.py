"""Make sure a log directory exists and accepts new files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import DIRECTORY_PERMISSION
from .errors import DirectoryError

LOGGER = logging.getLogger(__name__)


def ensure_directory(path: Path, mode: int = DIRECTORY_PERMISSION) -> Path:
    """Return ``path`` once it is an existing, writable directory.

    Missing directories are created with their parents, then ``mode`` is
    applied with ``chmod`` so the bits do not depend on the process umask.
    """

    path = Path(path)
    if path.is_dir():
        if not os.access(path, os.W_OK | os.X_OK):
            raise DirectoryError(f"Not enough permissions to write to \"{path}\"")
        return path
    if path.exists():
        raise DirectoryError(f"\"{path}\" exists and is not a directory")

    try:
        path.mkdir(parents=True, exist_ok=True, mode=mode)
        os.chmod(path, mode)
    except OSError as exc:
        raise DirectoryError(f"Can not create folder \"{path}\". Error: {exc}") from exc
    LOGGER.debug("Created log directory %s with mode %o", path, mode)
    return path


__all__ = ["ensure_directory"]
