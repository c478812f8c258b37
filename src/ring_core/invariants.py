"""Structural audit for rings (test/debug aid).

Checks report the first violation as a message and return None when the
structure is healthy. Walks are bounded by the claimed size, so a corrupted
cycle is reported instead of looped over.
"""

from __future__ import annotations

from ring_core.arena import RingArena
from ring_core.protocols import CompareFn


def check_ring(
    arena: RingArena, tail, size: int, compare: CompareFn | None
) -> str | None:
    if compare is None:
        return "null comparator"
    if not arena.valid(tail):
        return "no dummy"
    sentinel = arena.next_of(tail)
    if not arena.valid(sentinel):
        return "null dummy"
    payload = arena.payload
    if payload[sentinel] is not None:
        return "dummy has real data"
    count = 0
    node = arena.next_of(sentinel)
    while node != sentinel:
        if not arena.valid(node):
            return "found null (not cyclic)"
        following = arena.next_of(node)
        if not arena.valid(following):
            return "found null (not cyclic)"
        if payload[node] is None:
            return "found null data"
        count += 1
        if count > size:
            return "too many nodes (bad cycle?)"
        if node != tail:
            if following == sentinel:
                return "tail is not the last node"
            if compare(payload[node], payload[following]) > 0:
                return f"found out of order: {payload[node]!r} and {payload[following]!r}"
        node = following
    if count != size:
        return f"size wrong: claimed {size} but has {count} elements."
    return None


def check_cursor(arena: RingArena, tail, size: int, precursor, cursor) -> str | None:
    """Validate an iterator's cursor pair against a healthy ring."""
    if not arena.valid(cursor):
        return "cursor is null"
    if not arena.valid(precursor):
        return "precursor is null"
    if precursor != cursor and arena.next_of(precursor) != cursor:
        return "precursor is bad"
    node = arena.next_of(tail)
    steps = 0
    while node != precursor and node != tail and steps <= size:
        node = arena.next_of(node)
        steps += 1
    if node != precursor:
        return "precursor not in list"
    return None


def well_formed(
    arena: RingArena, tail, size: int, compare: CompareFn | None
) -> bool:
    return check_ring(arena, tail, size, compare) is None


__all__ = ["check_ring", "check_cursor", "well_formed"]
