"""Round-brush rasterization in image space.

Strokes are traced in *screen* space so that fast pointer motion between two
move events still produces a gap-free path, and every path point is stamped
as a disk in *image* space. The disk radius is ``max(1, brush_size / zoom)``:
the footprint is constant on screen and shrinks in image space as the view
zooms in.
"""

from __future__ import annotations

import math
from typing import FrozenSet, Iterator, Tuple

from screenmark.core.view import Point, ViewTransform

Pixel = Tuple[int, int]
Bounds = Tuple[int, int]  # (width, height)


def stamp(center: Point, radius: float, bounds: Bounds) -> FrozenSet[Pixel]:
    """Return the integer pixels inside the inclusive disk around ``center``.

    Pixels outside ``[0, width) x [0, height)`` are dropped.
    """
    cx, cy = center
    width, height = bounds
    r_sq = radius * radius
    x0 = max(0, math.floor(cx - radius))
    x1 = min(width - 1, math.ceil(cx + radius))
    y0 = max(0, math.floor(cy - radius))
    y1 = min(height - 1, math.ceil(cy + radius))
    out: set[Pixel] = set()
    for x in range(x0, x1 + 1):
        ddx = (x - cx) ** 2
        for y in range(y0, y1 + 1):
            if ddx + (y - cy) ** 2 <= r_sq:
                out.add((x, y))
    return frozenset(out)


def line_path(p0: Point, p1: Point) -> Iterator[Point]:
    """Yield the Bresenham walk of screen points from ``p0`` toward ``p1``.

    The walk moves one unit per axis at most on each step and stops once it
    is within 1.0 of ``p1`` on both axes. ``p0`` is always yielded.
    """
    x0, y0 = p0
    x1, y1 = p1
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1.0 if x0 < x1 else -1.0
    sy = 1.0 if y0 < y1 else -1.0
    err = dx + dy
    x, y = float(x0), float(y0)
    # Each step advances at least one axis, so this bounds the walk
    max_steps = math.ceil(dx) + math.ceil(-dy) + 1
    for _ in range(max_steps + 1):
        yield (x, y)
        if abs(x - x1) < 1.0 and abs(y - y1) < 1.0:
            return
        e2 = 2.0 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


class BrushRasterizer:
    """Converts screen-space brush positions into image-space pixel sets."""

    def __init__(
        self, view: ViewTransform, bounds: Bounds, *, brush_size: float = 5.0
    ) -> None:
        if brush_size <= 0:
            raise ValueError("brush_size must be > 0")
        self.view = view
        self.bounds = (int(bounds[0]), int(bounds[1]))
        self.brush_size = float(brush_size)

    def footprint(self, screen_pos: Point) -> Tuple[Point, float]:
        """Return ``(image_center, radius)`` for a brush at ``screen_pos``."""
        center = self.view.screen_to_image(screen_pos[0], screen_pos[1])
        return center, self.view.brush_radius(self.brush_size)

    def stamp(self, screen_pos: Point) -> FrozenSet[Pixel]:
        center, radius = self.footprint(screen_pos)
        return stamp(center, radius, self.bounds)

    def trace_line(self, p0: Point, p1: Point) -> FrozenSet[Pixel]:
        """Pixels covered by the brush dragged from ``p0`` to ``p1``."""
        out: set[Pixel] = set()
        for pos in line_path(p0, p1):
            out |= self.stamp(pos)
        return frozenset(out)
