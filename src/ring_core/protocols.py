from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompareFn(Protocol):
    # negative / zero / positive, like a three-way comparator
    def __call__(self, a, b) -> int:
        ...


@runtime_checkable
class RingCheckFn(Protocol):
    def __call__(
        self, arena, tail: int, size: int, compare: CompareFn | None
    ) -> str | None:
        ...


@runtime_checkable
class GuardsEnabledFn(Protocol):
    def __call__(self) -> bool:
        ...


__all__ = ["CompareFn", "RingCheckFn", "GuardsEnabledFn"]
