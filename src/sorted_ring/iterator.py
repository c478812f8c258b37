from __future__ import annotations

from collections.abc import Iterator

from ring_core.errors import (
    RingConcurrentModificationError,
    RingExhaustedError,
    RingIteratorStateError,
)
from ring_core.guards import guard_cursor


class RingIterator(Iterator):
    """Fail-fast iterator over a SortedCollection with removal.

    ``precursor`` trails ``cursor`` by one node after each ``next()``; the two
    are equal when nothing is pending removal. Any structural change made
    through another path invalidates the iterator; its own ``remove()``
    re-syncs the stamp snapshot.
    """

    __slots__ = ("_owner", "_stamp", "_precursor", "_cursor")

    def __init__(self, owner):
        self._owner = owner
        self._stamp = owner._stamp
        sentinel = owner._arena.next_of(owner._tail)
        self._precursor = sentinel
        self._cursor = sentinel
        self._guard("iterator constructor")

    def _guard(self, context: str) -> None:
        owner = self._owner
        if owner._stamp != self._stamp:
            return
        guard_cursor(
            owner._arena,
            owner._tail,
            owner._size,
            owner._compare,
            self._precursor,
            self._cursor,
            context,
            cfg=owner._cfg,
        )

    def _check_stamp(self, context: str) -> None:
        if self._owner._stamp != self._stamp:
            raise RingConcurrentModificationError(
                expected_stamp=self._stamp,
                actual_stamp=self._owner._stamp,
                context=context,
            )

    def has_next(self) -> bool:
        self._check_stamp("has_next")
        return self._cursor != self._owner._tail

    def __next__(self):
        if not self.has_next():
            raise RingExhaustedError(context="next")
        arena = self._owner._arena
        self._precursor = self._cursor
        self._cursor = arena.next_of(self._cursor)
        self._guard("next")
        return arena.value_of(self._cursor)

    def remove(self) -> None:
        """Remove the element returned by the last ``next()``."""
        self._check_stamp("remove")
        if self._precursor == self._cursor:
            raise RingIteratorStateError(context="remove")
        owner = self._owner
        arena = owner._arena
        removing_tail = self._cursor == owner._tail
        arena.link(self._precursor, arena.next_of(self._cursor))
        arena.free(self._cursor)
        self._cursor = self._precursor
        if removing_tail:
            owner._tail = self._cursor
        owner._size -= 1
        owner._stamp += 1
        self._stamp = owner._stamp
        self._guard("remove")


__all__ = ["RingIterator"]
