from __future__ import annotations

from vlist.ui_runtime.extent_index import ExtentIndex
from vlist.ui_runtime.spacer import SpacerController, Spacing, sum_leading, sum_trailing


def test_leading_and_trailing_space() -> None:
    extents = [10.0, 20.0, 30.0, 40.0]
    spacer = SpacerController(ExtentIndex(extents))

    assert spacer.compute_leading_space(2) == 30.0
    assert spacer.compute_trailing_space(2, 4) == 70.0
    assert spacer.compute_leading_space(0) == 0.0
    assert spacer.compute_trailing_space(4, 4) == 0.0
    assert spacer.total_height() == 100.0


def test_index_backed_spacing_matches_naive_sums() -> None:
    extents = [float(5 + (i * 3) % 17) for i in range(64)]
    spacer = SpacerController(ExtentIndex(extents))

    for start, end in ((0, 10), (12, 30), (40, 64)):
        spacing = spacer.spacing_for(start, end, len(extents))
        assert spacing.leading == sum_leading(start, extents)
        assert spacing.trailing == sum_trailing(end, extents)
        assert spacing.leading + sum(extents[start:end]) + spacing.trailing == sum(extents)


def test_mark_applied_reports_changes_only() -> None:
    spacer = SpacerController(ExtentIndex([10.0]))

    assert spacer.mark_applied(Spacing(0.0, 10.0))
    assert not spacer.mark_applied(Spacing(0.0, 10.0))
    spacer.reset()
    assert spacer.applied is None
    assert spacer.mark_applied(Spacing(0.0, 10.0))
