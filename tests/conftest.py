import os
import sys
import random

import pytest

# Check ring invariants after every mutation unless explicitly overridden.
os.environ.setdefault("RING_TEST_GUARDS", "1")

# Ensure src/ is importable when pytest runs without an editable install.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from ring_core.arena import RingArena  # noqa: E402
from ring_core.ordering import natural_compare  # noqa: E402


@pytest.fixture
def arena():
    return RingArena(4)


@pytest.fixture
def compare():
    return natural_compare


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def metrics_on(monkeypatch):
    from ring_metrics.metrics import metrics_reset

    monkeypatch.setenv("RING_METRICS", "1")
    metrics_reset()
    yield
    metrics_reset()
