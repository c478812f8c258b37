"""Ring primitives over a RingArena.

A ring is a cycle of arena slots with exactly one sentinel slot (payload
None). It is identified by its tail: the node whose successor is the
sentinel, so both ends are one hop away. The empty ring is the sentinel
linked to itself; there is no "no ring" value.

Merge, partition and quicksort only relink existing slots.
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple

from ring_core.arena import NIL, RingArena
from ring_core.protocols import CompareFn
from ring_metrics.metrics import _build_update, _merge_update, _partition_update


class PartitionRuns(NamedTuple):
    # last node of the < run, or the range's `before` node when that run is empty
    smaller_end: int
    pivot: int
    # last node of the == run; the pivot itself when it has no duplicates
    pivot_end: int
    # last node of the whole range
    last: int


def build_ring(arena: RingArena, values: Iterable, sentinel: int | None = None) -> int:
    """Build a ring holding ``values`` in source order and return its tail.

    A fresh sentinel is allocated unless one is passed in; a reused sentinel
    loses whatever it was linked to. The result is not assumed sorted.
    """
    values = list(values)
    if sentinel is None:
        sentinel = arena.alloc()
    else:
        arena.payload[sentinel] = None
    _build_update()
    if not values:
        arena.link(sentinel, sentinel)
        return sentinel
    ids = arena.alloc_block(len(values))
    payload = arena.payload
    for node, value in zip(ids.tolist(), values):
        payload[node] = value
    succ = arena.succ
    succ[sentinel] = ids[0]
    succ[ids[:-1]] = ids[1:]
    succ[ids[-1]] = sentinel
    return int(ids[-1])


def ring_nodes(arena: RingArena, tail: int) -> Iterator[int]:
    sentinel = arena.next_of(tail)
    node = arena.next_of(sentinel)
    while node != sentinel:
        yield node
        node = arena.next_of(node)


def ring_values(arena: RingArena, tail: int) -> list:
    payload = arena.payload
    return [payload[node] for node in ring_nodes(arena, tail)]


def ring_size(arena: RingArena, tail: int) -> int:
    return sum(1 for _ in ring_nodes(arena, tail))


def merge_rings(arena: RingArena, tail1: int, tail2: int, compare: CompareFn) -> int:
    """Merge sorted ring ``tail2`` into sorted ring ``tail1``; return the new tail.

    On ties the node from the first ring goes first. The result keeps the
    first ring's sentinel; the second sentinel is left as an empty ring and
    must not be used as a handle to the merged nodes.

    If ``compare`` raises, both rings are closed and still sorted before the
    error propagates: second-ring nodes merged so far belong to the first
    ring, the rest stay behind ``tail2``.
    """
    sentinel2 = arena.next_of(tail2)
    if sentinel2 == tail2:
        return tail1
    succ = arena.succ
    payload = arena.payload
    sentinel1 = int(succ[tail1])
    a = int(succ[sentinel1])
    b = int(succ[sentinel2])
    succ[sentinel2] = sentinel2
    current = sentinel1
    merged = 0
    try:
        while a != sentinel1 and b != sentinel2:
            if compare(payload[a], payload[b]) <= 0:
                succ[current] = a
                current = a
                a = int(succ[a])
            else:
                succ[current] = b
                current = b
                b = int(succ[b])
                merged += 1
    except Exception:
        # close both rings again; nodes already taken stay in the first one
        succ[current] = a
        succ[sentinel2] = b
        raise
    if a == sentinel1:
        # first ring exhausted: the rest of the second ring ends the result
        succ[current] = b
        succ[tail2] = sentinel1
        tail1 = tail2
    else:
        succ[current] = a
    _merge_update(merged)
    return tail1


def partition_runs(
    arena: RingArena, before: int, after: int, compare: CompareFn
) -> PartitionRuns | None:
    """3-way partition of the nodes strictly between ``before`` and ``after``.

    The first node of the range is the pivot. Afterwards the range reads:
    nodes < pivot, the pivot, nodes == pivot, nodes > pivot; order inside the
    < and > runs is arbitrary. ``before`` and ``after`` stay in place, so a
    sub-range can be sorted without closing it into its own ring. Returns
    None for an empty range.
    """
    succ = arena.succ
    payload = arena.payload
    pivot = int(succ[before])
    if pivot == after:
        return None
    pivot_value = payload[pivot]
    smaller_end = before
    pivot_end = pivot
    larger_start = NIL
    larger_end = NIL
    current = int(succ[pivot])
    while current != after:
        following = int(succ[current])
        comp = compare(payload[current], pivot_value)
        if comp < 0:
            succ[smaller_end] = current
            smaller_end = current
        elif comp > 0:
            if larger_start == NIL:
                larger_start = current
            else:
                succ[larger_end] = current
            larger_end = current
        else:
            succ[pivot_end] = current
            pivot_end = current
        current = following
    succ[smaller_end] = pivot
    if larger_start == NIL:
        last = pivot_end
    else:
        succ[pivot_end] = larger_start
        last = larger_end
    succ[last] = after
    _partition_update()
    return PartitionRuns(smaller_end, pivot, pivot_end, last)


def partition_ring(arena: RingArena, tail: int, compare: CompareFn) -> int:
    """Partition a whole ring around its first element; return the new tail."""
    sentinel = arena.next_of(tail)
    if sentinel == tail or arena.next_of(sentinel) == tail:
        return tail
    return partition_runs(arena, sentinel, sentinel, compare).last


def _run_has_pair(arena: RingArena, before: int, end: int) -> bool:
    # run (before, end] holds at least two nodes
    return end != before and arena.next_of(before) != end


def quicksort_ring(arena: RingArena, tail: int, compare: CompareFn) -> int:
    """Destructively sort a ring in non-decreasing order; return the new tail.

    Pivot is always the first node of a range, so already-ordered input is
    the O(n^2) case. Pending sub-ranges live on an explicit stack rather
    than the call stack, and the == run is never revisited.
    """
    sentinel = arena.next_of(tail)
    if sentinel == tail or arena.next_of(sentinel) == tail:
        return tail
    pending = [(sentinel, sentinel)]
    while pending:
        before, after = pending.pop()
        runs = partition_runs(arena, before, after, compare)
        if runs is None:
            continue
        if after == sentinel:
            tail = runs.last
        if _run_has_pair(arena, before, runs.smaller_end):
            pending.append((before, runs.pivot))
        if _run_has_pair(arena, runs.pivot_end, runs.last):
            pending.append((runs.pivot_end, after))
    return tail


def ring_to_string(arena: RingArena, tail) -> str:
    """Render a ring for debugging, e.g. ``(1,3,5)`` or ``()``.

    Broken structure yields a marker (``<NULL>``, ``<NO DUMMY>``,
    ``<DUMMY x>``) or output without the closing paren; a cycle that skips
    the sentinel is cut short with ``...``.
    """
    if not arena.valid(tail):
        return "<NULL>"
    sentinel = arena.next_of(tail)
    if sentinel == tail:
        return "()"
    if not arena.valid(sentinel):
        return "<NO DUMMY>"
    if arena.payload[sentinel] is not None:
        return f"<DUMMY {arena.payload[sentinel]}>"
    parts = []
    head = arena.next_of(sentinel)
    fast = arena.next_of(head) if arena.valid(head) else NIL
    while head != sentinel:
        if not arena.valid(head):
            return "(" + ",".join(parts)
        if head == fast:
            return "(" + ",".join(parts) + ",..."
        parts.append(str(arena.payload[head]))
        head = arena.next_of(head)
        for _ in range(2):
            if fast != sentinel and arena.valid(fast):
                fast = arena.next_of(fast)
    return "(" + ",".join(parts) + ")"


__all__ = [
    "PartitionRuns",
    "build_ring",
    "ring_nodes",
    "ring_values",
    "ring_size",
    "merge_rings",
    "partition_runs",
    "partition_ring",
    "quicksort_ring",
    "ring_to_string",
]
