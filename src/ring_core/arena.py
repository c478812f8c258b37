"""Host-side node arena backing ring collections.

Nodes are int slot ids. Each slot has:
  payload[id]  the element (None for sentinels and free slots)
  succ[id]     the successor id (NIL for free slots)

Fresh slots are handed out past ``count``; freed slots go on ``free_stack``
and are reused first, mirroring the device allocator's free_stack/free_top
pair. The arena grows by doubling and never shrinks; a collection drops the
whole arena on clear().
"""

from __future__ import annotations

import numpy as np

from ring_core.config import DEFAULT_INITIAL_CAPACITY
from ring_core.errors import RingCorruptionError
from ring_metrics.metrics import _alloc_update, _free_update

NIL = -1
SUCC_DTYPE = np.int64


class RingArena:
    __slots__ = ("payload", "succ", "free_stack", "free_top", "count")

    def __init__(self, capacity: int = DEFAULT_INITIAL_CAPACITY):
        cap = max(int(capacity), 1)
        self.payload = np.empty(cap, dtype=object)
        self.succ = np.full(cap, NIL, dtype=SUCC_DTYPE)
        self.free_stack = np.zeros(cap, dtype=SUCC_DTYPE)
        self.free_top = 0
        self.count = 0

    @property
    def capacity(self) -> int:
        return int(self.succ.shape[0])

    @property
    def live(self) -> int:
        return self.count - self.free_top

    def _grow(self, need: int) -> None:
        cap = self.capacity
        new_cap = cap
        while new_cap < need:
            new_cap *= 2
        if new_cap == cap:
            return
        payload = np.empty(new_cap, dtype=object)
        payload[:cap] = self.payload
        succ = np.full(new_cap, NIL, dtype=SUCC_DTYPE)
        succ[:cap] = self.succ
        free_stack = np.zeros(new_cap, dtype=SUCC_DTYPE)
        free_stack[: self.free_top] = self.free_stack[: self.free_top]
        self.payload = payload
        self.succ = succ
        self.free_stack = free_stack

    def alloc(self, value=None) -> int:
        """Allocate one slot holding ``value``, linked to itself."""
        if self.free_top > 0:
            self.free_top -= 1
            node = int(self.free_stack[self.free_top])
        else:
            if self.count == self.capacity:
                self._grow(self.count + 1)
            node = self.count
            self.count += 1
        self.payload[node] = value
        self.succ[node] = node
        _alloc_update(1)
        return node

    def alloc_block(self, n: int) -> np.ndarray:
        """Allocate ``n`` slots at once; payloads are left for the caller."""
        n = int(n)
        if n <= 0:
            return np.zeros((0,), dtype=SUCC_DTYPE)
        take = min(n, self.free_top)
        reused = self.free_stack[self.free_top - take : self.free_top].copy()
        self.free_top -= take
        rest = n - take
        if self.count + rest > self.capacity:
            self._grow(self.count + rest)
        fresh = np.arange(self.count, self.count + rest, dtype=SUCC_DTYPE)
        self.count += rest
        ids = np.concatenate([reused[::-1], fresh])
        self.succ[ids] = ids
        _alloc_update(n)
        return ids

    def free(self, node: int) -> None:
        if not self.valid(node):
            raise RingCorruptionError(f"free of dead slot {node}", context="free")
        self.payload[node] = None
        self.succ[node] = NIL
        self.free_stack[self.free_top] = node
        self.free_top += 1
        _free_update(1)

    def in_bounds(self, node) -> bool:
        return node is not None and 0 <= node < self.count

    def valid(self, node) -> bool:
        """True for an allocated (not free) slot."""
        return self.in_bounds(node) and int(self.succ[node]) != NIL

    def next_of(self, node: int) -> int:
        return int(self.succ[node])

    def value_of(self, node: int):
        return self.payload[node]

    def link(self, node: int, successor: int) -> None:
        self.succ[node] = successor


__all__ = ["NIL", "SUCC_DTYPE", "RingArena"]
