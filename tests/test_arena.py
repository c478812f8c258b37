import pytest

from ring_core.arena import NIL, RingArena
from ring_core.errors import RingCorruptionError


def test_alloc_links_slot_to_itself(arena):
    node = arena.alloc("x")
    assert arena.next_of(node) == node
    assert arena.value_of(node) == "x"
    assert arena.valid(node)
    assert arena.live == 1


def test_sentinel_alloc_has_empty_payload(arena):
    node = arena.alloc()
    assert arena.value_of(node) is None


def test_free_then_alloc_reuses_slot(arena):
    a = arena.alloc(1)
    b = arena.alloc(2)
    arena.free(a)
    assert not arena.valid(a)
    assert arena.value_of(a) is None
    assert int(arena.succ[a]) == NIL
    c = arena.alloc(3)
    assert c == a
    assert arena.valid(b)
    assert arena.live == 2


def test_double_free_is_corruption(arena):
    node = arena.alloc(1)
    arena.free(node)
    with pytest.raises(RingCorruptionError):
        arena.free(node)


def test_alloc_block_takes_free_slots_first(arena):
    a = arena.alloc(1)
    b = arena.alloc(2)
    arena.alloc(3)
    arena.free(a)
    arena.free(b)
    ids = arena.alloc_block(3).tolist()
    assert ids == [b, a, 3]
    assert arena.free_top == 0
    assert arena.count == 4
    for node in ids:
        assert arena.next_of(node) == node


def test_alloc_block_empty(arena):
    ids = arena.alloc_block(0)
    assert ids.shape == (0,)
    assert arena.count == 0


def test_grow_keeps_payloads_and_links():
    arena = RingArena(1)
    nodes = [arena.alloc(i * 10) for i in range(9)]
    assert arena.capacity >= 9
    assert [arena.value_of(n) for n in nodes] == [i * 10 for i in range(9)]
    assert all(arena.next_of(n) == n for n in nodes)


def test_grow_keeps_free_stack():
    arena = RingArena(2)
    a = arena.alloc(1)
    arena.alloc(2)
    arena.free(a)
    arena.alloc_block(5)
    assert arena.free_top == 0
    assert arena.capacity >= 6


def test_payload_may_be_a_tuple(arena):
    node = arena.alloc((3, "a"))
    assert arena.value_of(node) == (3, "a")


def test_bounds(arena):
    node = arena.alloc(1)
    assert arena.in_bounds(node)
    assert not arena.in_bounds(NIL)
    assert not arena.in_bounds(None)
    assert not arena.valid(node + 1)
