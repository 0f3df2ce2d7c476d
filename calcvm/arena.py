"""Memory arena.

A bump allocator over a fixed-capacity byte buffer. The compiler reserves
space for each instruction as it emits it, so a finished program is one
contiguous run of bytes starting at the arena's base.

:meth:`MemoryArena.reset` rewinds the cursor in constant time. Every view
handed out before the reset still points into the same buffer and will see
whatever the next compilation writes there; callers must not read an old
view after resetting.


File: arena.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging

from calcvm.exceptions import AllocationException

logger = logging.getLogger(__name__)


def kilobytes(value: int) -> int:
    """Number of bytes in ``value`` kilobytes."""
    return value * 1024


def megabytes(value: int) -> int:
    """Number of bytes in ``value`` megabytes."""
    return kilobytes(value) * 1024


DEFAULT_ARENA_SIZE = megabytes(1)


class MemoryArena:
    """Bump allocator over a fixed-size buffer."""

    def __init__(self, size: int = DEFAULT_ARENA_SIZE, base: bytearray | None = None):
        """
        Initialize the arena.

        Parameters:
            size (int): Capacity in bytes.
            base (bytearray): Optional caller-supplied buffer of at least
                ``size`` bytes. A zeroed buffer is allocated when omitted.
        """
        if size < 0:
            raise ValueError(f"Arena size must not be negative, got {size}")
        if base is None:
            base = bytearray(size)
        elif len(base) < size:
            raise ValueError(
                f"Arena buffer holds {len(base)} bytes, {size} requested"
            )
        self.size = size
        self.base = base
        self.used = 0
        self._view = memoryview(self.base)

    @property
    def remaining(self) -> int:
        """Bytes still available before the arena is exhausted."""
        return self.size - self.used

    def reserve(self, size: int) -> memoryview:
        """
        Hand out the next ``size`` bytes.

        Returns:
            memoryview: A writable view over the reserved bytes.

        Raises:
            AllocationException: If the reservation would exceed capacity.
        """
        if size < 0:
            raise ValueError(f"Cannot reserve a negative size, got {size}")
        if self.used + size > self.size:
            raise AllocationException(size, self.used, self.size)
        start = self.used
        self.used += size
        return self._view[start:self.used]

    def reset(self) -> None:
        """
        Release every reservation at once.
        """
        logger.debug("arena reset after %d of %d bytes", self.used, self.size)
        self.used = 0

    def contents(self) -> memoryview:
        """
        View over every byte reserved since the last reset.
        """
        return self._view[:self.used]

    def __repr__(self) -> str:
        return f"MemoryArena(used={self.used}, size={self.size})"
