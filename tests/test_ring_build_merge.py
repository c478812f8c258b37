from ring_core.ordering import natural_compare
from ring_core.ring import build_ring, merge_rings, ring_size, ring_values


def _by_first(a, b):
    return natural_compare(a[0], b[0])


def test_build_keeps_source_order(arena):
    tail = build_ring(arena, [3, 1, 2])
    assert ring_values(arena, tail) == [3, 1, 2]
    assert arena.value_of(tail) == 2
    sentinel = arena.next_of(tail)
    assert arena.value_of(sentinel) is None
    assert arena.value_of(arena.next_of(sentinel)) == 3


def test_build_from_generator(arena):
    tail = build_ring(arena, (x * x for x in range(4)))
    assert ring_values(arena, tail) == [0, 1, 4, 9]
    assert ring_size(arena, tail) == 4


def test_build_empty_is_sentinel_loop(arena):
    tail = build_ring(arena, [])
    assert arena.next_of(tail) == tail
    assert arena.value_of(tail) is None
    assert ring_values(arena, tail) == []


def test_build_reuses_given_sentinel(arena):
    sentinel = arena.alloc("stale")
    tail = build_ring(arena, [7, 8], sentinel=sentinel)
    assert arena.next_of(tail) == sentinel
    assert arena.value_of(sentinel) is None
    assert ring_values(arena, tail) == [7, 8]


def test_merge_interleaves_sorted_rings(arena):
    t1 = build_ring(arena, [1, 3, 5])
    t2 = build_ring(arena, [2, 3, 4])
    merged = merge_rings(arena, t1, t2, natural_compare)
    assert ring_values(arena, merged) == [1, 2, 3, 3, 4, 5]


def test_merge_ties_take_first_ring_first(arena):
    t1 = build_ring(arena, [(1, "a"), (3, "a"), (5, "a")])
    t2 = build_ring(arena, [(2, "b"), (3, "b"), (4, "b")])
    merged = merge_rings(arena, t1, t2, _by_first)
    assert ring_values(arena, merged) == [
        (1, "a"),
        (2, "b"),
        (3, "a"),
        (3, "b"),
        (4, "b"),
        (5, "a"),
    ]


def test_merge_keeps_first_sentinel_and_empties_second(arena):
    t1 = build_ring(arena, [1, 4])
    t2 = build_ring(arena, [2, 3])
    sentinel1 = arena.next_of(t1)
    sentinel2 = arena.next_of(t2)
    merged = merge_rings(arena, t1, t2, natural_compare)
    assert merged == t1
    assert arena.next_of(merged) == sentinel1
    assert arena.next_of(sentinel2) == sentinel2


def test_merge_second_ring_runs_past_first(arena):
    t1 = build_ring(arena, [1, 2])
    t2 = build_ring(arena, [0, 5, 6])
    sentinel1 = arena.next_of(t1)
    merged = merge_rings(arena, t1, t2, natural_compare)
    assert merged == t2
    assert arena.next_of(merged) == sentinel1
    assert ring_values(arena, merged) == [0, 1, 2, 5, 6]


def test_merge_with_empty_second_is_identity(arena):
    t1 = build_ring(arena, [1, 2, 3])
    t2 = build_ring(arena, [])
    assert merge_rings(arena, t1, t2, natural_compare) == t1
    assert ring_values(arena, t1) == [1, 2, 3]


def test_merge_into_empty_first(arena):
    t1 = build_ring(arena, [])
    t2 = build_ring(arena, [1, 2])
    merged = merge_rings(arena, t1, t2, natural_compare)
    assert merged == t2
    assert arena.next_of(merged) == t1
    assert ring_values(arena, merged) == [1, 2]


def test_merge_allocates_nothing(arena):
    t1 = build_ring(arena, [1, 5, 9])
    t2 = build_ring(arena, [2, 6])
    before = arena.count
    merge_rings(arena, t1, t2, natural_compare)
    assert arena.count == before
