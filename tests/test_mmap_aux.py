import struct

import pytest

from ezlogger.mmap_aux import DEFAULT_CAPACITY, HEADER_SIZE, MAGIC, MMapAux
from ezlogger.sysutil import get_page_size


@pytest.fixture
def buf(tmp_path):
    aux = MMapAux(tmp_path / "cache.mmap")
    yield aux
    aux.close()


def test_new_file_is_empty_and_valid(buf):
    assert buf.is_valid()
    assert buf.empty()
    assert buf.size() == 0
    assert buf.data() == b""
    assert buf.ratio() == 0.0


def test_new_file_capacity_and_file_size(buf):
    assert buf.capacity >= DEFAULT_CAPACITY
    assert buf.capacity % get_page_size() == 0
    assert buf.file_path.stat().st_size == buf.capacity


def test_push_appends(buf):
    buf.push(b"hello ")
    buf.push(bytearray(b"world"))
    assert buf.data() == b"hello world"
    assert buf.size() == len(b"hello world")
    assert not buf.empty()


def test_ratio_matches_size_over_data_area(buf):
    buf.push(b"x" * 1000)
    assert buf.ratio() == pytest.approx(1000 / (buf.capacity - HEADER_SIZE))


def test_clear_empties(buf):
    buf.push(b"abc")
    buf.clear()
    assert buf.empty()
    assert buf.data() == b""


def test_resize_shrinks_and_grows(buf):
    buf.push(b"abcdef")
    buf.resize(3)
    assert buf.data() == b"abc"
    big = buf.capacity * 2
    buf.resize(big)
    assert buf.size() == big
    assert buf.capacity >= big + HEADER_SIZE
    assert buf.capacity % get_page_size() == 0


def test_resize_rejects_negative(buf):
    with pytest.raises(ValueError):
        buf.resize(-1)


def test_push_grows_past_default_capacity(buf):
    payload = bytes(range(256)) * 2500
    start = buf.capacity
    buf.push(payload)
    assert buf.capacity > start
    assert buf.capacity >= len(payload) + HEADER_SIZE
    assert buf.file_path.stat().st_size == buf.capacity
    assert buf.data() == payload


def test_contents_persist_across_reopen(tmp_path):
    path = tmp_path / "persist.mmap"
    payload = b"persisted" * 100000
    with MMapAux(path) as first:
        first.push(payload)
        capacity = first.capacity
    with MMapAux(path) as second:
        assert second.data() == payload
        assert second.capacity == capacity


def test_file_layout_header_then_data(tmp_path):
    path = tmp_path / "layout.mmap"
    with MMapAux(path) as aux:
        aux.push(b"abc")
    raw = path.read_bytes()
    assert struct.unpack("=II", raw[:HEADER_SIZE]) == (MAGIC, 3)
    assert raw[HEADER_SIZE:HEADER_SIZE + 3] == b"abc"
    assert MAGIC == 0xDEADBEEF


def test_bad_magic_is_reset(tmp_path):
    path = tmp_path / "corrupt.mmap"
    path.write_bytes(struct.pack("=II", 0x12345678, 99) + b"junk")
    with MMapAux(path) as aux:
        assert aux.is_valid()
        assert aux.size() == 0


def test_existing_header_is_kept(tmp_path):
    path = tmp_path / "existing.mmap"
    path.write_bytes(struct.pack("=II", MAGIC, 4) + b"data")
    with MMapAux(path) as aux:
        assert aux.data() == b"data"


def test_closed_buffer_is_invalid(tmp_path):
    aux = MMapAux(tmp_path / "closed.mmap")
    aux.push(b"abc")
    aux.close()
    assert not aux.is_valid()
    assert aux.size() == 0
    assert aux.data() == b""
    aux.push(b"ignored")
    assert aux.empty()
    assert aux.ratio() == 0.0


def test_sync_keeps_data(buf):
    buf.push(b"synced")
    buf.sync()
    raw = buf.file_path.read_bytes()
    assert raw[HEADER_SIZE:HEADER_SIZE + len(b"synced")] == b"synced"