"""Committed strokes, the in-progress stroke, and eraser hit-testing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from screenmark.core.brush import BrushRasterizer, Pixel
from screenmark.core.raster import RasterCanvas
from screenmark.core.view import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Stroke:
    """Immutable set of image-space pixels produced by one draw gesture.

    ``coords`` caches the pixels as ``(xs, ys)`` index arrays for painting
    and hit-testing; it does not take part in equality.
    """

    pixels: FrozenSet[Pixel]
    coords: Tuple[np.ndarray, np.ndarray] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        arr = np.array(sorted(self.pixels), dtype=np.intp).reshape(-1, 2)
        object.__setattr__(self, "coords", (arr[:, 0], arr[:, 1]))

    def __len__(self) -> int:
        return len(self.pixels)

    def hit(self, center: Point, radius: float) -> bool:
        """True if any pixel lies within ``radius`` of ``center`` (inclusive)."""
        xs, ys = self.coords
        if xs.size == 0:
            return False
        d_sq = (xs - center[0]) ** 2 + (ys - center[1]) ** 2
        return bool(np.any(d_sq <= radius * radius))


class StrokeStore:
    """Owns the committed stroke sequence and the stroke being drawn.

    The canvas is kept in sync with the committed sequence: commits paint
    incrementally, erases rebuild it from the original image.
    """

    def __init__(self, canvas: RasterCanvas, brush: BrushRasterizer) -> None:
        self.canvas = canvas
        self.brush = brush
        self._strokes: List[Stroke] = []
        self._current: set[Pixel] = set()

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        return tuple(self._strokes)

    @property
    def current(self) -> FrozenSet[Pixel]:
        return frozenset(self._current)

    # ------------------------------------------------------------------
    def begin_gesture(self, screen_pos: Point, *, erasing: bool = False) -> None:
        """Start a gesture; an eraser press erases without waiting for motion."""
        if erasing:
            self.erase_at(screen_pos)

    def extend_gesture(
        self,
        prev_screen_pos: Optional[Point],
        new_screen_pos: Point,
        *,
        erasing: bool = False,
    ) -> None:
        if erasing:
            self.erase_at(new_screen_pos)
        elif prev_screen_pos is not None:
            self._current |= self.brush.trace_line(prev_screen_pos, new_screen_pos)

    def end_gesture(self) -> Optional[Stroke]:
        """Commit the current stroke; no-op when nothing was drawn."""
        if not self._current:
            return None
        stroke = Stroke(frozenset(self._current))
        self._current.clear()
        self.canvas.paint(stroke)
        self._strokes.append(stroke)
        logger.debug(
            "committed stroke of %d px (%d total)", len(stroke), len(self._strokes)
        )
        return stroke

    def erase_at(self, screen_pos: Point) -> List[Stroke]:
        """Remove every committed stroke touched by the eraser at ``screen_pos``.

        Returns the removed strokes. The canvas is regenerated only when at
        least one stroke was removed.
        """
        center, radius = self.brush.footprint(screen_pos)
        kept: List[Stroke] = []
        removed: List[Stroke] = []
        for stroke in self._strokes:
            (removed if stroke.hit(center, radius) else kept).append(stroke)
        if removed:
            self._strokes = kept
            self.canvas.regenerate(self._strokes)
            logger.debug("erased %d stroke(s), %d remain", len(removed), len(kept))
        return removed

    def clear(self) -> None:
        """Drop every stroke, including the one in progress."""
        self._current.clear()
        if self._strokes:
            self._strokes.clear()
            self.canvas.regenerate(())

