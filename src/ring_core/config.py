from __future__ import annotations

from dataclasses import dataclass

from ring_core.errors import RingArgumentError
from ring_core.protocols import GuardsEnabledFn, RingCheckFn

DEFAULT_INITIAL_CAPACITY = 16


@dataclass(frozen=True, slots=True)
class RingConfig:
    """Collection DI bundle (host-side control surface).

    initial_capacity:
      arena slots reserved on construction and after clear()
    guards_enabled_fn:
      overrides the RING_TEST_GUARDS switch when set
    check_fn:
      overrides the invariant checker run by the guard
    """

    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    guards_enabled_fn: GuardsEnabledFn | None = None
    check_fn: RingCheckFn | None = None

    def __post_init__(self):
        if not isinstance(self.initial_capacity, int) or self.initial_capacity < 1:
            raise RingArgumentError(
                f"initial_capacity must be a positive int, got {self.initial_capacity!r}",
                context="RingConfig",
            )


DEFAULT_RING_CONFIG = RingConfig()


__all__ = ["RingConfig", "DEFAULT_RING_CONFIG", "DEFAULT_INITIAL_CAPACITY"]
