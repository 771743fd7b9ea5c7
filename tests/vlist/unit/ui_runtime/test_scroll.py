from vlist.ui_runtime.scroll import apply_wheel_scroll, clamp_scroll_offset, max_scroll_offset


def _wheel(dy: float, offset: float):
    return apply_wheel_scroll(dy, offset, content_height=1000.0, viewport_height=200.0, step=40.0)


def test_apply_wheel_scroll_up_and_down() -> None:
    assert _wheel(dy=-1.0, offset=100.0).next_offset == 60.0
    assert _wheel(dy=1.0, offset=100.0).next_offset == 140.0


def test_apply_wheel_scroll_clamps_partial_step() -> None:
    outcome = _wheel(dy=1.0, offset=790.0)
    assert outcome.handled and outcome.next_offset == 800.0


def test_apply_wheel_scroll_noop_when_blocked() -> None:
    up_blocked = _wheel(dy=-1.0, offset=0.0)
    down_blocked = _wheel(dy=1.0, offset=800.0)
    assert not up_blocked.handled and up_blocked.next_offset == 0.0
    assert not down_blocked.handled and down_blocked.next_offset == 800.0


def test_clamp_scroll_offset_limits() -> None:
    assert clamp_scroll_offset(-1.0, content_height=1000.0, viewport_height=300.0) == 0.0
    assert clamp_scroll_offset(9999.0, content_height=1000.0, viewport_height=300.0) == 700.0
    assert max_scroll_offset(100.0, 300.0) == 0.0
