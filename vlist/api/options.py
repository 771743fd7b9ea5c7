"""Construction options and collaborator contracts for a virtual list."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from vlist.api.surface import RenderSurface, ResizeSource

type RenderFailurePolicy = Literal["abort", "skip"]

RENDER_FAILURE_POLICIES: tuple[RenderFailurePolicy, ...] = ("abort", "skip")
DEFAULT_BUFFER_SIZE = 5


@dataclass(frozen=True, slots=True)
class RenderFailure:
    """Explicit renderer outcome for an item that produced no node."""

    reason: str
    error: BaseException | None = None


type RenderResult[N] = N | RenderFailure
type ItemRenderer[T, N] = Callable[[T], N | RenderFailure]
type ItemKeyFn[T] = Callable[[T, int], str]


@dataclass(frozen=True, slots=True)
class VirtualListOptions[T, N]:
    """Recognized construction options.

    ``nominal_item_height`` of ``0`` (or any non-positive value) means the
    extent is unknown; it is back-filled from the first measured node.
    ``viewport`` defaults to the container when omitted.
    """

    container: RenderSurface[N]
    item_renderer: ItemRenderer[T, N]
    items: Sequence[T] = field(default_factory=tuple)
    nominal_item_height: float = 0.0
    item_key: ItemKeyFn[T] | None = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    render_failure_policy: RenderFailurePolicy = "abort"
    viewport: ResizeSource | None = None
