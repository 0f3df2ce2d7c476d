"""
Tests for the bump allocator backing compiled bytecode.
"""
import pytest

from calcvm.arena import DEFAULT_ARENA_SIZE, MemoryArena, kilobytes, megabytes
from calcvm.exceptions import AllocationException


def test_reserve_advances_cursor_and_returns_writable_view():
    arena = MemoryArena(16)
    first = arena.reserve(4)
    second = arena.reserve(2)
    assert len(first) == 4 and len(second) == 2
    assert arena.used == 6
    assert arena.remaining == 10
    first[0] = 0xAB
    second[1] = 0xCD
    assert bytes(arena.contents()) == b"\xab\x00\x00\x00\x00\xcd"


def test_reserve_up_to_exact_capacity():
    arena = MemoryArena(8)
    arena.reserve(8)
    assert arena.remaining == 0
    arena.reserve(0)


def test_exhaustion_raises_and_leaves_cursor_alone():
    arena = MemoryArena(8)
    arena.reserve(6)
    with pytest.raises(AllocationException) as exc:
        arena.reserve(3)
    assert (exc.value.requested, exc.value.used, exc.value.size) == (3, 6, 8)
    assert arena.used == 6


def test_reset_rewinds_in_place():
    arena = MemoryArena(4)
    arena.reserve(4)[:] = b"\x01\x02\x03\x04"
    arena.reset()
    assert arena.used == 0
    assert len(arena.contents()) == 0
    # Old bytes remain until overwritten.
    arena.reserve(1)[0] = 9
    assert bytes(arena.base) == b"\x09\x02\x03\x04"


def test_caller_supplied_buffer():
    buffer = bytearray(32)
    arena = MemoryArena(16, buffer)
    arena.reserve(2)[:] = b"hi"
    assert buffer[:2] == b"hi"
    with pytest.raises(AllocationException):
        arena.reserve(15)


def test_invalid_sizes():
    with pytest.raises(ValueError):
        MemoryArena(-1)
    with pytest.raises(ValueError):
        MemoryArena(8, bytearray(4))
    with pytest.raises(ValueError):
        MemoryArena(8).reserve(-1)


def test_size_helpers():
    assert kilobytes(2) == 2048
    assert megabytes(1) == 1024 * 1024
    assert DEFAULT_ARENA_SIZE == megabytes(1)
    assert MemoryArena().size == DEFAULT_ARENA_SIZE
