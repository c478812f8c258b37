from __future__ import annotations

from typing import Callable

from ring_core.errors import RingArgumentError
from ring_core.protocols import CompareFn


def natural_compare(a, b) -> int:
    """Natural ordering for elements supporting ``<``."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def ordering_from_key(key: Callable) -> CompareFn:
    """Build a three-way ordering function from a ``key=`` style callable."""
    if key is None or not callable(key):
        raise RingArgumentError("key must be callable", context="ordering_from_key")

    def _compare(a, b) -> int:
        return natural_compare(key(a), key(b))

    _compare.__name__ = f"by_{getattr(key, '__name__', 'key')}"
    return _compare


def resolve_compare(
    compare: CompareFn | None,
    key: Callable | None = None,
    *,
    context: str | None = None,
) -> CompareFn:
    if key is not None:
        if compare is not natural_compare:
            raise RingArgumentError(
                "pass either compare or key, not both", context=context
            )
        return ordering_from_key(key)
    if compare is None:
        raise RingArgumentError("comparator cannot be null", context=context)
    if not callable(compare):
        raise RingArgumentError("comparator must be callable", context=context)
    return compare


__all__ = ["natural_compare", "ordering_from_key", "resolve_compare"]
