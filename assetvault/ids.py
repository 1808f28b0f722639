# assetvault/ids.py
"""Monotonic asset identifier allocation."""

import logging

from .errors import IdentifierExhausted

logger = logging.getLogger(__name__)

# Identifiers are unsigned 64-bit.
MAX_ID = 2**64 - 1


class IdAllocator:
    """
    Hands out strictly increasing integer ids, starting at ``start``.

    Ids are never reused. Allocating past ``max_id`` raises
    IdentifierExhausted instead of wrapping around.

    The allocator does no locking of its own; the owning Registry
    serializes calls.
    """

    def __init__(self, start: int = 1, max_id: int = MAX_ID):
        if start < 1:
            raise ValueError(f"start must be >= 1, got {start}")
        if max_id < start:
            raise ValueError(f"max_id ({max_id}) must be >= start ({start})")
        self._next = start
        self.max_id = max_id

    def peek(self) -> int:
        """Return the id the next allocation would produce."""
        return self._next

    def next_id(self) -> int:
        """Allocate and return a fresh id."""
        current = self._next
        if current > self.max_id:
            logger.error(f"Identifier space exhausted at {self.max_id}")
            raise IdentifierExhausted(f"No identifiers left (max_id={self.max_id})")
        self._next = current + 1
        return current
