"""System queries: page size, process and thread ids, local time, file size."""

from __future__ import annotations

import mmap
import os
import threading
import time
from pathlib import Path


def get_page_size() -> int:
    """Return the memory page size of the system in bytes."""
    return mmap.PAGESIZE


def get_process_id() -> int:
    """Return the id of the current process."""
    return os.getpid()


def get_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def local_time(now: float | None = None) -> time.struct_time:
    """Convert a timestamp (default: the current time) to local broken-down time."""
    return time.localtime(now)


def get_file_size(file_path: str | os.PathLike) -> int:
    """Return the size of a file in bytes, or 0 if it does not exist."""
    path = Path(file_path)
    if not path.exists():
        return 0
    if path.is_dir():
        raise IsADirectoryError(f"not a regular file: {path}")
    return path.stat().st_size