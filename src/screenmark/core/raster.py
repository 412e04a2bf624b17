"""Raster canvas derived from the captured image plus committed strokes.

Buffers are ``(height, width, 4)`` ``uint8`` numpy arrays in RGBA order,
indexed ``[y, x]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import numpy as np

from screenmark.core.brush import Pixel

if TYPE_CHECKING:
    from screenmark.core.strokes import Stroke

Color = Tuple[int, int, int, int]


def _as_rgba(image: np.ndarray) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError(f"expected an (H, W, 4) RGBA array, got shape {arr.shape}")
    if arr.dtype != np.uint8:
        raise ValueError(f"expected uint8 pixels, got {arr.dtype}")
    return arr


class RasterCanvas:
    """Mutable canvas over an immutable original image.

    Invariant: a pixel holds the stroke colour when any committed stroke
    covers it, else the original image's colour. Strokes are painted
    incrementally on commit; removing a stroke rebuilds the whole buffer
    from the original because overlapping strokes share one colour.
    """

    def __init__(self, original: np.ndarray, stroke_color: Color) -> None:
        base = _as_rgba(original).copy()
        base.setflags(write=False)
        self._original = base
        self._pixels = base.copy()
        self.stroke_color = tuple(int(c) for c in stroke_color)

    @property
    def original(self) -> np.ndarray:
        """Read-only view of the captured image."""
        return self._original

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def size(self) -> Tuple[int, int]:
        """``(width, height)`` in image pixels."""
        h, w = self._original.shape[:2]
        return (w, h)

    def paint(self, stroke: Stroke) -> None:
        xs, ys = stroke.coords
        self._pixels[ys, xs] = self.stroke_color

    def regenerate(self, strokes: Iterable[Stroke]) -> None:
        """Rebuild from the original and replay ``strokes`` in order."""
        self._pixels = self._original.copy()
        for stroke in strokes:
            self.paint(stroke)

    def composite(self, extra: Iterable[Pixel]) -> np.ndarray:
        """Return a fresh copy with ``extra`` pixels painted in stroke colour."""
        out = self._pixels.copy()
        pts = list(extra)
        if pts:
            xs, ys = np.array(pts, dtype=np.intp).T
            out[ys, xs] = self.stroke_color
        return out
