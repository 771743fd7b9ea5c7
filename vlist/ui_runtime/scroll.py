"""Scroll offset helpers for pixel-based list viewports."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScrollOutcome:
    """Result of attempting to scroll a list-like viewport."""

    handled: bool
    next_offset: float


def max_scroll_offset(content_height: float, viewport_height: float) -> float:
    """Return the largest reachable scroll offset."""
    return max(0.0, float(content_height) - max(0.0, float(viewport_height)))


def clamp_scroll_offset(offset: float, content_height: float, viewport_height: float) -> float:
    """Clamp scroll offset to valid viewport bounds."""
    return max(0.0, min(float(offset), max_scroll_offset(content_height, viewport_height)))


def apply_wheel_scroll(
    dy: float,
    current_offset: float,
    content_height: float,
    viewport_height: float,
    *,
    step: float,
) -> ScrollOutcome:
    """Convert a wheel delta into a clamped pixel offset change."""
    if dy == 0 or step <= 0:
        return ScrollOutcome(handled=False, next_offset=current_offset)
    direction = 1.0 if dy > 0 else -1.0
    target = clamp_scroll_offset(current_offset + direction * step, content_height, viewport_height)
    if target == current_offset:
        return ScrollOutcome(handled=False, next_offset=current_offset)
    return ScrollOutcome(handled=True, next_offset=target)
