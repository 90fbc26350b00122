"""Tests for the sentinel file lock."""

import asyncio
import os
import subprocess
import sys
import time
from pathlib import Path

import pytest

from cpm.errors import LockTimeoutError
from cpm.io.file_lock import FileLock, file_lock, lock_path_for


def test_lock_path_is_sibling(tmp_path: Path) -> None:
    assert lock_path_for(tmp_path / "config.json") == tmp_path / "config.json.lock"


async def test_acquire_and_release(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"

    async with file_lock(resource) as lock:
        assert lock.held
        assert lock.lock_path.exists()
        assert int(lock.lock_path.read_text(encoding="utf-8")) > 0

    assert not lock.held
    assert not lock_path_for(resource).exists()


async def test_released_when_block_raises(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"

    with pytest.raises(RuntimeError):
        async with file_lock(resource):
            raise RuntimeError("boom")

    assert not lock_path_for(resource).exists()


async def test_creates_missing_parent_directory(tmp_path: Path) -> None:
    resource = tmp_path / "nested" / "dir" / "config.json"

    async with FileLock(resource) as lock:
        assert lock.lock_path.parent.is_dir()


async def test_fresh_lock_times_out(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"
    lock_path_for(resource).write_text(str(int(time.time() * 1000)), encoding="utf-8")

    with pytest.raises(LockTimeoutError) as exc_info:
        async with file_lock(resource, timeout=0.2, retry_interval=0.05):
            pass

    assert exc_info.value.resource == str(resource)
    assert lock_path_for(resource).exists()


async def test_stale_lock_is_reclaimed(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"
    old_ms = int((time.time() - 60) * 1000)
    lock_path_for(resource).write_text(str(old_ms), encoding="utf-8")

    async with file_lock(resource, timeout=0.5) as lock:
        assert lock.held


async def test_empty_lock_blocks_until_timeout(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"
    lock_path_for(resource).write_text("", encoding="utf-8")

    with pytest.raises(LockTimeoutError):
        async with file_lock(resource, timeout=0.3, retry_interval=0.05):
            pass

    assert lock_path_for(resource).exists()


async def test_unparseable_lock_reclaimed_once_stale(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"
    sentinel = lock_path_for(resource)
    sentinel.write_text("not-a-timestamp", encoding="utf-8")
    old = time.time() - 60
    os.utime(sentinel, (old, old))

    async with file_lock(resource, timeout=0.5) as lock:
        assert lock.held


async def test_no_temp_files_left_behind(tmp_path: Path) -> None:
    resource = tmp_path / "config.json"

    async with file_lock(resource):
        pass

    assert list(tmp_path.iterdir()) == []



async def test_release_without_acquire_is_noop(tmp_path: Path) -> None:
    lock = FileLock(tmp_path / "config.json")

    await lock.release()

    assert not lock.held


async def test_concurrent_increments_are_serialized(tmp_path: Path) -> None:
    counter = tmp_path / "counter.txt"
    counter.write_text("0", encoding="utf-8")

    async def increment() -> None:
        async with file_lock(counter, retry_interval=0.01):
            value = int(counter.read_text(encoding="utf-8"))
            await asyncio.sleep(0.05)
            counter.write_text(str(value + 1), encoding="utf-8")

    await asyncio.gather(increment(), increment())

    assert counter.read_text(encoding="utf-8") == "2"


_WORKER = """
import asyncio
import os
import subprocess
import sys
import sys
from pathlib import Path

from cpm.io.file_lock import file_lock

counter = Path(sys.argv[1])


async def main() -> None:
    for _ in range(int(sys.argv[2])):
        async with file_lock(counter, retry_interval=0.001, timeout=60.0):
            value = int(counter.read_text(encoding="utf-8"))
            counter.write_text(str(value + 1), encoding="utf-8")


asyncio.run(main())
"""


def test_increments_across_processes_are_serialized(tmp_path: Path) -> None:
    counter = tmp_path / "counter.txt"
    counter.write_text("0", encoding="utf-8")
    workers = [
        subprocess.Popen([sys.executable, "-c", _WORKER, str(counter), "50"])
        for _ in range(4)
    ]

    return_codes = [worker.wait(timeout=120) for worker in workers]

    assert return_codes == [0, 0, 0, 0]
    assert counter.read_text(encoding="utf-8") == "200"
