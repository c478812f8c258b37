import os

_ring_metrics_compares = 0
_ring_metrics_allocs = 0
_ring_metrics_frees = 0
_ring_metrics_builds = 0
_ring_metrics_partitions = 0
_ring_metrics_merges = 0
_ring_metrics_merged_nodes = 0


def _ring_metrics_enabled():
    value = os.environ.get("RING_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def metrics_reset():
    global _ring_metrics_compares
    global _ring_metrics_allocs
    global _ring_metrics_frees
    global _ring_metrics_builds
    global _ring_metrics_partitions
    global _ring_metrics_merges
    global _ring_metrics_merged_nodes
    _ring_metrics_compares = 0
    _ring_metrics_allocs = 0
    _ring_metrics_frees = 0
    _ring_metrics_builds = 0
    _ring_metrics_partitions = 0
    _ring_metrics_merges = 0
    _ring_metrics_merged_nodes = 0


def metrics_get():
    if not _ring_metrics_enabled():
        return {
            "compares": 0,
            "allocs": 0,
            "frees": 0,
            "builds": 0,
            "partitions": 0,
            "merges": 0,
            "merged_nodes": 0,
        }
    return {
        "compares": int(_ring_metrics_compares),
        "allocs": int(_ring_metrics_allocs),
        "frees": int(_ring_metrics_frees),
        "builds": int(_ring_metrics_builds),
        "partitions": int(_ring_metrics_partitions),
        "merges": int(_ring_metrics_merges),
        "merged_nodes": int(_ring_metrics_merged_nodes),
    }


def _counting_compare(compare):
    """Wrap an ordering function so each call bumps the compare counter.

    Returns ``compare`` itself when metrics are off, so the hot path pays
    nothing unless RING_METRICS is set at construction time.
    """
    if not _ring_metrics_enabled():
        return compare

    def _compare(a, b):
        global _ring_metrics_compares
        _ring_metrics_compares += 1
        return compare(a, b)

    return _compare


def _alloc_update(count):
    global _ring_metrics_allocs
    if not _ring_metrics_enabled():
        return
    _ring_metrics_allocs += int(count)


def _free_update(count):
    global _ring_metrics_frees
    if not _ring_metrics_enabled():
        return
    _ring_metrics_frees += int(count)


def _build_update():
    global _ring_metrics_builds
    if not _ring_metrics_enabled():
        return
    _ring_metrics_builds += 1


def _partition_update():
    global _ring_metrics_partitions
    if not _ring_metrics_enabled():
        return
    _ring_metrics_partitions += 1


def _merge_update(merged_nodes):
    global _ring_metrics_merges
    global _ring_metrics_merged_nodes
    if not _ring_metrics_enabled():
        return
    _ring_metrics_merges += 1
    _ring_metrics_merged_nodes += int(merged_nodes)


__all__ = [
    "metrics_reset",
    "metrics_get",
    "_ring_metrics_enabled",
    "_counting_compare",
    "_alloc_update",
    "_free_update",
    "_build_update",
    "_partition_update",
    "_merge_update",
]
