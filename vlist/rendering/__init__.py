"""Rendering surface implementations."""

from vlist.rendering.memory_surface import MemoryNode, MemorySurface, SurfaceOp

__all__ = ["MemoryNode", "MemorySurface", "SurfaceOp"]
