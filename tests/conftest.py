"""Shared fixtures for the bucket logger tests."""

from __future__ import annotations

import contextlib
import fcntl
import os
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List

import pytest

FROZEN_NOW = datetime(2023, 2, 12, 16, 26, 3)


class HeldLock:
    """Exclusive ``flock`` held through an independent file handle."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o666)
        fcntl.flock(self.fd, fcntl.LOCK_EX)
        self.held = True

    def release(self) -> None:
        if not self.held:
            return
        fcntl.flock(self.fd, fcntl.LOCK_UN)
        os.close(self.fd)
        self.held = False


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    return lambda: FROZEN_NOW


@pytest.fixture
def hold_lock() -> Iterator[Callable[[Path], HeldLock]]:
    locks: List[HeldLock] = []

    def _hold(path: Path) -> HeldLock:
        lock = HeldLock(path)
        locks.append(lock)
        return lock

    yield _hold
    for lock in locks:
        with contextlib.suppress(OSError):
            lock.release()


@pytest.fixture
def flock_calls(monkeypatch: pytest.MonkeyPatch) -> List[int]:
    """Record every ``flock`` operation while still performing it."""

    calls: List[int] = []
    real_flock = fcntl.flock

    def _recording_flock(fd, operation):
        calls.append(operation)
        return real_flock(fd, operation)

    monkeypatch.setattr(fcntl, "flock", _recording_flock)
    return calls
