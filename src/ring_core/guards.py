from __future__ import annotations

import os

from ring_core.arena import RingArena
from ring_core.config import DEFAULT_RING_CONFIG, RingConfig
from ring_core.errors import RingCorruptionError
from ring_core.invariants import check_cursor, check_ring


def _env_guards_enabled() -> bool:
    value = os.environ.get("RING_TEST_GUARDS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def guards_enabled(cfg: RingConfig = DEFAULT_RING_CONFIG) -> bool:
    if cfg.guards_enabled_fn is not None:
        return bool(cfg.guards_enabled_fn())
    return _env_guards_enabled()


def guard_ring(
    arena: RingArena,
    tail: int,
    size: int,
    compare,
    context: str,
    *,
    cfg: RingConfig = DEFAULT_RING_CONFIG,
) -> None:
    if not guards_enabled(cfg):
        return
    check_fn = cfg.check_fn or check_ring
    message = check_fn(arena, tail, size, compare)
    if message is not None:
        raise RingCorruptionError(message, context=context)


def guard_cursor(
    arena: RingArena,
    tail: int,
    size: int,
    compare,
    precursor: int,
    cursor: int,
    context: str,
    *,
    cfg: RingConfig = DEFAULT_RING_CONFIG,
) -> None:
    if not guards_enabled(cfg):
        return
    guard_ring(arena, tail, size, compare, context, cfg=cfg)
    message = check_cursor(arena, tail, size, precursor, cursor)
    if message is not None:
        raise RingCorruptionError(message, context=context)


__all__ = [
    "guards_enabled",
    "guard_ring",
    "guard_cursor",
]
