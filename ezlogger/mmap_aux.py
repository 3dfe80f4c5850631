"""A growable byte store kept in a memory-mapped file.

The file starts with an 8-byte header, a magic number followed by the
number of bytes in use, both 32-bit in native byte order; the data
follows it. The mapping always spans whole pages.
"""

from __future__ import annotations

import mmap
import os
import struct
from pathlib import Path

from .defer import ExecuteOnScopeExit
from .sysutil import get_file_size, get_page_size

MAGIC = 0xDEADBEEF
DEFAULT_CAPACITY = 512 * 1024
_HEADER = struct.Struct("=II")
HEADER_SIZE = _HEADER.size
_MAX_SIZE = 0xFFFFFFFF


def _valid_capacity(size: int) -> int:
    """Round ``size`` up to a whole number of pages."""
    page = get_page_size()
    return (size + page - 1) // page * page


class MMapAux:
    """Append-only buffer persisted through a shared memory mapping of a file.

    The file is created if missing. Its initial capacity is the larger of
    512 KiB and the current file size, rounded up to whole pages.
    """

    def __init__(self, file_path: str | os.PathLike) -> None:
        self._path = Path(file_path)
        self._map: mmap.mmap | None = None
        self._capacity = 0
        self._reserve(max(DEFAULT_CAPACITY, get_file_size(self._path)))
        self._init_header()

    @property
    def file_path(self) -> Path:
        return self._path

    @property
    def capacity(self) -> int:
        """Bytes currently mapped, header included."""
        return self._capacity

    def data(self) -> bytes:
        """Return a copy of the stored bytes."""
        if not self.is_valid():
            return b""
        return bytes(self._map[HEADER_SIZE:HEADER_SIZE + self.size()])

    def size(self) -> int:
        """Number of data bytes in use."""
        header = self._header()
        if header is None or header[0] != MAGIC:
            return 0
        return header[1]

    def resize(self, new_size: int) -> None:
        """Set the number of bytes in use, growing the mapping if needed."""
        if new_size < 0 or new_size > _MAX_SIZE:
            raise ValueError(f"size out of range: {new_size}")
        if not self.is_valid():
            return
        self._ensure_capacity(new_size)
        self._write_size(new_size)

    def push(self, data) -> None:
        """Append ``data`` (any bytes-like object) after the bytes in use."""
        payload = bytes(memoryview(data))
        if not self.is_valid():
            return
        start = self.size()
        new_size = start + len(payload)
        if new_size > _MAX_SIZE:
            raise ValueError("buffer would exceed the largest storable size")
        self._ensure_capacity(new_size)
        offset = HEADER_SIZE + start
        self._map[offset:offset + len(payload)] = payload
        self._write_size(new_size)

    def ratio(self) -> float:
        """Fraction of the data area in use."""
        if not self.is_valid():
            return 0.0
        return self.size() / (self._capacity - HEADER_SIZE)

    def empty(self) -> bool:
        return self.size() == 0

    def clear(self) -> None:
        """Mark all bytes as unused."""
        if self.is_valid():
            self._write_size(0)

    def is_valid(self) -> bool:
        """True while mapped with an intact magic number."""
        header = self._header()
        return header is not None and header[0] == MAGIC

    def sync(self) -> None:
        """Write the mapped pages back to the file."""
        if self._map is not None:
            self._map.flush()

    def close(self) -> None:
        """Flush and release the mapping; later calls see an invalid buffer."""
        self._unmap()
        self._capacity = 0

    def __enter__(self) -> "MMapAux":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def _header(self) -> tuple[int, int] | None:
        if self._map is None or self._capacity < HEADER_SIZE:
            return None
        return _HEADER.unpack_from(self._map, 0)

    def _write_size(self, size: int) -> None:
        _HEADER.pack_into(self._map, 0, MAGIC, size)

    def _init_header(self) -> None:
        header = self._header()
        if header is not None and header[0] != MAGIC:
            self._write_size(0)

    def _reserve(self, new_size: int) -> None:
        if new_size <= self._capacity:
            return
        new_size = _valid_capacity(new_size)
        if new_size == self._capacity:
            return
        self._unmap()
        self._map = self._try_map(new_size)
        self._capacity = new_size

    def _ensure_capacity(self, new_size: int) -> None:
        real_size = new_size + HEADER_SIZE
        if real_size <= self._capacity:
            return
        page = get_page_size()
        target = self._capacity
        while target < real_size:
            target += page
        self._reserve(target)

    def _try_map(self, capacity: int) -> mmap.mmap:
        flags = os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0)
        fd = os.open(self._path, flags, 0o700)
        with ExecuteOnScopeExit(os.close, fd):
            os.ftruncate(fd, capacity)
            return mmap.mmap(fd, capacity)

    def _unmap(self) -> None:
        if self._map is not None:
            self._map.flush()
            self._map.close()
        self._map = None