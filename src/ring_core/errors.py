from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RingArgumentError(ValueError):
    message: str
    context: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class RingConcurrentModificationError(RuntimeError):
    expected_stamp: int
    actual_stamp: int
    context: str | None = None

    def __str__(self) -> str:
        return "iterator stale"


@dataclass(frozen=True)
class RingIteratorStateError(RuntimeError):
    context: str | None = None

    def __str__(self) -> str:
        return "cannot remove until next() is called (again)"


@dataclass(frozen=True)
class RingExhaustedError(StopIteration):
    context: str | None = None

    def __str__(self) -> str:
        return "no more elements"


@dataclass(frozen=True)
class RingCorruptionError(AssertionError):
    message: str
    context: str | None = None

    def __str__(self) -> str:
        if self.context:
            return f"invariant failed ({self.context}): {self.message}"
        return f"invariant failed: {self.message}"


@dataclass(frozen=True)
class RingElementMissingError(ValueError):
    value: object

    def __str__(self) -> str:
        return f"{self.value!r} not in collection"


@dataclass(frozen=True)
class RingEmptyError(IndexError):
    context: str | None = None

    def __str__(self) -> str:
        if self.context:
            return f"{self.context} from empty collection"
        return "empty collection"


__all__ = [
    "RingArgumentError",
    "RingConcurrentModificationError",
    "RingIteratorStateError",
    "RingExhaustedError",
    "RingCorruptionError",
    "RingElementMissingError",
    "RingEmptyError",
]
