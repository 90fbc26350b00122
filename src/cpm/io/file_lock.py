"""Cross-process advisory lock for shared JSON documents.

The lock is a sentinel file next to the protected resource ("<file>.lock")
created atomically with os.link, so exactly one process wins the create. The
sentinel holds the acquisition time in milliseconds and is linked into place
fully written. A sentinel older than stale_after seconds, or one that cannot
be read, is treated as abandoned by a crashed process and removed. Content
that does not parse counts as held until the file itself is stale.

Usage:
    async with file_lock(config_path):
        data = read(config_path)
        write(config_path, merge(data))
"""

import asyncio
import logging
import os
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from types import TracebackType

from cpm.constants import LOCK_RETRY_INTERVAL, LOCK_STALE_AFTER, LOCK_TIMEOUT
from cpm.errors import LockTimeoutError

logger = logging.getLogger(__name__)


def lock_path_for(resource: Path) -> Path:
    """Return the sentinel path guarding a resource."""
    return resource.with_name(resource.name + ".lock")


class FileLock:
    """Exclusive lock on a resource path, held via a sentinel file."""

    def __init__(
        self,
        resource: Path,
        *,
        stale_after: float = LOCK_STALE_AFTER,
        retry_interval: float = LOCK_RETRY_INTERVAL,
        timeout: float = LOCK_TIMEOUT,
    ) -> None:
        self._resource = resource
        self._lock_path = lock_path_for(resource)
        self._stale_after = stale_after
        self._retry_interval = retry_interval
        self._timeout = timeout
        self._held = False

    @property
    def lock_path(self) -> Path:
        return self._lock_path

    @property
    def held(self) -> bool:
        return self._held

    async def acquire(self) -> None:
        """Acquire the lock, waiting up to the timeout.

        Raises:
            LockTimeoutError: If another holder keeps a fresh lock past the timeout
        """
        self._lock_path.parent.mkdir(parents=True, exist_ok=True)
        deadline = time.monotonic() + self._timeout

        while True:
            if self._try_create():
                self._held = True
                logger.debug("Acquired lock %s", self._lock_path)
                return

            if self._reclaim_if_abandoned():
                continue

            if time.monotonic() >= deadline:
                raise LockTimeoutError(str(self._resource), self._timeout)

            await asyncio.sleep(self._retry_interval)

    async def release(self) -> None:
        """Release the lock. A missing sentinel is not an error."""
        if not self._held:
            return
        self._held = False
        self._lock_path.unlink(missing_ok=True)
        logger.debug("Released lock %s", self._lock_path)

    async def __aenter__(self) -> "FileLock":
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.release()

    def _try_create(self) -> bool:
        # The timestamp is written to a private temp file first and then linked
        # into place, so the sentinel never exists without its content.
        tmp_path = self._lock_path.with_name(
            f"{self._lock_path.name}.{os.getpid()}.{id(self)}.tmp"
        )
        tmp_path.write_text(str(int(time.time() * 1000)), encoding="utf-8")
        try:
            os.link(tmp_path, self._lock_path)
        except FileExistsError:
            return False
        finally:
            tmp_path.unlink(missing_ok=True)
        return True

    def _reclaim_if_abandoned(self) -> bool:
        """Remove a stale or unreadable sentinel. Returns True if one was removed."""
        try:
            content = self._lock_path.read_text(encoding="utf-8").strip()
            modified_at = self._lock_path.stat().st_mtime
        except FileNotFoundError:
            # Holder released between our create attempt and this read
            return True
        except OSError:
            logger.debug("Removing unreadable lock %s", self._lock_path)
            self._lock_path.unlink(missing_ok=True)
            return True

        try:
            locked_at = int(content) / 1000
        except ValueError:
            # Unparseable content counts as held until the file itself goes stale
            locked_at = modified_at

        age = time.time() - locked_at
        if age > self._stale_after:
            logger.debug("Removing stale lock %s (age %.1fs)", self._lock_path, age)
            self._lock_path.unlink(missing_ok=True)
            return True

        return False


@asynccontextmanager
async def file_lock(
    resource: Path,
    *,
    stale_after: float = LOCK_STALE_AFTER,
    retry_interval: float = LOCK_RETRY_INTERVAL,
    timeout: float = LOCK_TIMEOUT,
) -> AsyncIterator[FileLock]:
    """Hold the lock on resource for the duration of the block.

    The lock is released on every exit path, including exceptions and
    cancellation.
    """
    lock = FileLock(
        resource,
        stale_after=stale_after,
        retry_interval=retry_interval,
        timeout=timeout,
    )
    await lock.acquire()
    try:
        yield lock
    finally:
        await lock.release()
