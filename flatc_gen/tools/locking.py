"""Cross-process build lock for the shared cache.

The lock file is a rendezvous point, not a resource: it is touched before
every acquisition and never removed. Exclusion comes from an OS advisory
lock (filelock.FileLock), so a crashed or killed holder releases it
implicitly.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from filelock import FileLock, Timeout

from flatc_gen.errors import LockFileError, LockTimeoutError

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path

logger = logging.getLogger(__name__)

# Poll once per second, give up after 30 failed attempts (~30s)
DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_POLL_INTERVAL = 1.0


def touch_lock_file(lock_path: Path) -> Path:
    """Create the lock file if it does not exist. No-op if it does.

    Raises:
        LockFileError: If the lock file or its directory cannot be created.
    """
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock_path.touch(exist_ok=True)
    except OSError as exc:
        raise LockFileError(lock_path, str(exc)) from exc
    return lock_path


def _try_acquire(lock: FileLock, lock_path: Path) -> bool:
    """One non-blocking acquire. False when another holder owns the lock."""
    try:
        lock.acquire(timeout=0)
    # filelock.Timeout is an OSError, so it must be caught first
    except Timeout:
        return False
    except OSError as exc:
        raise LockFileError(lock_path, str(exc)) from exc
    return True


@contextmanager
def acquire_lock(
    lock_path: Path,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> Generator[FileLock, None, None]:
    """Hold an exclusive lock on lock_path for the context body.

    Polls with a non-blocking acquire. Each failed attempt is counted and
    logged; once attempts exceed max_attempts the wait is abandoned.

    Args:
        lock_path: Existing lock file (see touch_lock_file).
        max_attempts: Failed attempts tolerated before giving up.
        poll_interval: Seconds to sleep between attempts.

    Yields:
        The held filelock.FileLock.

    Raises:
        LockTimeoutError: If the lock stays contended past max_attempts.
        LockFileError: If the lock file cannot be opened at all.

    Usage:
        with acquire_lock(cache_root / "flatc-gen.lock"):
            # clone and build safely
    """
    lock = FileLock(str(lock_path))
    attempts = 0
    while not _try_acquire(lock, lock_path):
        attempts += 1
        logger.warning(
            "Waiting lock of %s (attempt %d/%d)", lock_path, attempts, max_attempts
        )
        if attempts > max_attempts:
            raise LockTimeoutError(lock_path, attempts)
        time.sleep(poll_interval)

    try:
        yield lock
    finally:
        # FileLock.release is a no-op once the lock is no longer held
        lock.release()


def is_locked(lock_path: Path) -> bool:
    """Check whether another holder currently owns the lock.

    Probes with a non-blocking acquire and releases immediately. Returns
    False when the lock file does not exist.

    Raises:
        LockFileError: If the lock path exists but cannot be opened.
    """
    if not lock_path.exists():
        return False
    probe = FileLock(str(lock_path))
    if not _try_acquire(probe, lock_path):
        return True
    probe.release()
    return False
