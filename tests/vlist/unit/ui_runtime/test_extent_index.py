from __future__ import annotations

from vlist.ui_runtime.extent_index import ExtentIndex


def _naive_anchor(offset: float, extents: list[float]) -> int | None:
    total = 0.0
    for index, extent in enumerate(extents):
        total += extent
        if total > offset:
            return index
    return None


def test_prefix_and_range_sums_match_naive() -> None:
    extents = [float(10 + (i * 7) % 23) for i in range(37)]
    index = ExtentIndex(extents)

    for count in range(len(extents) + 1):
        assert index.prefix(count) == sum(extents[:count])
    assert index.range_sum(5, 20) == sum(extents[5:20])
    assert index.range_sum(20, 5) == 0.0
    assert index.total() == sum(extents)


def test_point_updates_propagate() -> None:
    extents = [50.0] * 16
    index = ExtentIndex(extents)

    index.set(3, 20.0)
    index.set(15, 0.0)

    assert index.value_at(3) == 20.0
    assert index.prefix(4) == 170.0
    assert index.total() == 50.0 * 14 + 20.0


def test_find_anchor_matches_linear_scan() -> None:
    extents = [float(5 + (i * 13) % 41) for i in range(50)]
    index = ExtentIndex(extents)

    for offset in range(0, int(sum(extents)) + 40, 3):
        assert index.find_anchor(float(offset)) == _naive_anchor(float(offset), extents)


def test_find_anchor_skips_zero_height_items() -> None:
    index = ExtentIndex([10.0, 0.0, 0.0, 10.0])

    assert index.find_anchor(0.0) == 0
    assert index.find_anchor(10.0) == 3
    assert index.find_anchor(20.0) is None


def test_empty_index() -> None:
    index = ExtentIndex()
    assert len(index) == 0
    assert index.total() == 0.0
    assert index.find_anchor(0.0) is None
