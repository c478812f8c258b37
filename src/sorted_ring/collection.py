from __future__ import annotations

from collections.abc import Collection
from typing import Iterable

from ring_core.arena import RingArena
from ring_core.config import DEFAULT_RING_CONFIG, RingConfig
from ring_core.errors import RingArgumentError, RingElementMissingError, RingEmptyError
from ring_core.guards import guard_ring
from ring_core.invariants import check_ring
from ring_core.ordering import natural_compare, resolve_compare
from ring_core.ring import (
    build_ring,
    merge_rings,
    quicksort_ring,
    ring_nodes,
    ring_size,
    ring_to_string,
    ring_values,
)
from ring_metrics.metrics import _counting_compare
from sorted_ring.iterator import RingIterator


class SortedCollection(Collection):
    """Multiset kept in non-decreasing order on a sentinel-terminated ring.

    Elements are ordered by ``compare(a, b)`` (negative / zero / positive);
    the default is the natural ``<`` order, and ``key=`` builds one from a
    key function. ``None`` is never a valid element.

    Single inserts walk the ring (O(n), O(1) when appending past the
    maximum). ``update`` builds a ring from the batch, quicksorts it and
    merges it in. Iterators are fail-fast; see RingIterator.
    """

    def __init__(
        self,
        iterable: Iterable | None = None,
        compare=natural_compare,
        *,
        key=None,
        cfg: RingConfig = DEFAULT_RING_CONFIG,
    ):
        ordering = resolve_compare(compare, key, context="SortedCollection")
        self._cfg = cfg
        self._ordering = ordering
        self._compare = _counting_compare(ordering)
        self._arena = RingArena(cfg.initial_capacity)
        self._tail = self._arena.alloc()
        self._size = 0
        self._stamp = 0
        self._guard("constructor")
        if iterable is not None:
            self.update(iterable)

    @property
    def compare(self):
        return self._ordering

    @property
    def stamp(self) -> int:
        return self._stamp

    def _guard(self, context: str) -> None:
        guard_ring(
            self._arena, self._tail, self._size, self._compare, context, cfg=self._cfg
        )

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> RingIterator:
        return RingIterator(self)

    def __contains__(self, value) -> bool:
        if value is None:
            return False
        arena = self._arena
        sentinel = arena.next_of(self._tail)
        node = arena.next_of(sentinel)
        while node != sentinel:
            comp = self._compare(value, arena.value_of(node))
            if comp == 0:
                return True
            if comp < 0:
                return False
            node = arena.next_of(node)
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_list()!r})"

    def add(self, element) -> None:
        if element is None:
            raise RingArgumentError("cannot add null", context="add")
        arena = self._arena
        compare = self._compare
        sentinel = arena.next_of(self._tail)
        if self._size == 0 or compare(element, arena.value_of(self._tail)) >= 0:
            node = arena.alloc(element)
            arena.link(node, sentinel)
            arena.link(self._tail, node)
            self._tail = node
        else:
            # element < max, so the walk stops before reaching the sentinel
            prev = sentinel
            current = arena.next_of(sentinel)
            while compare(element, arena.value_of(current)) > 0:
                prev = current
                current = arena.next_of(current)
            node = arena.alloc(element)
            arena.link(node, current)
            arena.link(prev, node)
        self._size += 1
        self._stamp += 1
        self._guard("add")

    def update(self, iterable: Iterable | None) -> bool:
        """Insert every element of ``iterable``; return False if it was empty."""
        if iterable is None:
            return False
        values = list(iterable)
        if not values:
            return False
        if len(values) == 1:
            self.add(values[0])
            return True
        if any(value is None for value in values):
            raise RingArgumentError("cannot add null", context="update")
        arena = self._arena
        batch_tail = build_ring(arena, values)
        batch_sentinel = arena.next_of(batch_tail)
        batch_nodes = list(ring_nodes(arena, batch_tail))
        try:
            batch_tail = quicksort_ring(arena, batch_tail, self._compare)
        except Exception:
            # the batch may be half-relinked; release it slot by slot
            for node in batch_nodes:
                arena.free(node)
            arena.free(batch_sentinel)
            raise
        try:
            self._tail = merge_rings(arena, self._tail, batch_tail, self._compare)
        except Exception:
            self._drop_ring(batch_tail)
            merged = ring_size(arena, self._tail) - self._size
            if merged:
                self._size += merged
                self._stamp += 1
            raise
        arena.free(batch_sentinel)
        self._size += len(values)
        self._stamp += 1
        self._guard("update")
        return True

    def _drop_ring(self, tail: int) -> None:
        arena = self._arena
        sentinel = arena.next_of(tail)
        for node in list(ring_nodes(arena, tail)):
            arena.free(node)
        arena.free(sentinel)

    def clear(self) -> None:
        self._arena = RingArena(self._cfg.initial_capacity)
        self._tail = self._arena.alloc()
        self._size = 0
        self._stamp += 1
        self._guard("clear")

    def discard(self, value) -> bool:
        """Remove one element equivalent to ``value``; return whether one was found."""
        if value is None:
            return False
        it = iter(self)
        for element in it:
            comp = self._compare(value, element)
            if comp == 0:
                it.remove()
                return True
            if comp < 0:
                break
        return False

    def remove(self, value) -> None:
        if not self.discard(value):
            raise RingElementMissingError(value)

    def _sweep(self, iterable: Iterable, keep_matches: bool) -> bool:
        targets = SortedCollection(
            [value for value in iterable if value is not None],
            self._ordering,
            cfg=self._cfg,
        ).to_list()
        compare = self._compare
        changed = False
        i = 0
        it = iter(self)
        for element in it:
            while i < len(targets) and compare(targets[i], element) < 0:
                i += 1
            match = i < len(targets) and compare(targets[i], element) == 0
            if match != keep_matches:
                it.remove()
                changed = True
        return changed

    def remove_all(self, iterable: Iterable) -> bool:
        """Remove every element equivalent to some element of ``iterable``."""
        return self._sweep(iterable, keep_matches=False)

    def retain_all(self, iterable: Iterable) -> bool:
        """Keep only elements equivalent to some element of ``iterable``."""
        return self._sweep(iterable, keep_matches=True)

    def count(self, value) -> int:
        if value is None:
            return 0
        total = 0
        arena = self._arena
        for node in ring_nodes(arena, self._tail):
            comp = self._compare(value, arena.value_of(node))
            if comp < 0:
                break
            if comp == 0:
                total += 1
        return total

    def first(self):
        if self._size == 0:
            raise RingEmptyError(context="first")
        arena = self._arena
        return arena.value_of(arena.next_of(arena.next_of(self._tail)))

    def last(self):
        if self._size == 0:
            raise RingEmptyError(context="last")
        return self._arena.value_of(self._tail)

    def to_list(self) -> list:
        return ring_values(self._arena, self._tail)

    def copy(self) -> "SortedCollection":
        clone = type(self)(compare=self._ordering, cfg=self._cfg)
        if self._size:
            # already sorted: relink in order instead of re-sorting
            clone._tail = build_ring(clone._arena, self.to_list(), sentinel=clone._tail)
            clone._size = self._size
            clone._stamp += 1
            clone._guard("copy")
        return clone

    def check(self) -> str | None:
        """Run the invariant checker; return the first violation or None."""
        return check_ring(self._arena, self._tail, self._size, self._compare)

    def well_formed(self) -> bool:
        return self.check() is None

    def debug_string(self) -> str:
        return ring_to_string(self._arena, self._tail)


__all__ = ["SortedCollection"]
