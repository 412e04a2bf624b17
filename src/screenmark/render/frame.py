"""Per-frame composition of the annotated view.

Each output pixel is computed independently of every other:

1. map the screen pixel back to image space through the frame's zoom/offset;
2. take the background colour, or the snapshot image pixel when the
   truncated coordinate falls inside the image;
3. when the spotlight is on, dim RGB outside the focus radius around the
   cursor (alpha untouched).

The renderer only ever reads a :class:`FrameSnapshot`, which the engine
builds once per frame before rendering starts. With ``workers > 1`` the frame
is split into horizontal bands rendered concurrently; each band writes a
disjoint slice of the output so no locking is needed.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from screenmark.render.canvas import Color
from screenmark.settings.values import RENDER_DEFAULTS, SPOTLIGHT_DEFAULTS


@dataclass(frozen=True, slots=True)
class FrameSnapshot:
    """Read-only state for one frame.

    ``image`` is the canvas with the in-progress stroke already painted on
    top; it must not be mutated while a frame is rendering.
    """

    image: np.ndarray
    zoom: float
    offset: Tuple[float, float]
    spotlight: bool = False
    cursor: Tuple[float, float] = (0.0, 0.0)


class FrameRenderer:
    """Renders :class:`FrameSnapshot` objects into RGBA frame buffers."""

    def __init__(
        self,
        *,
        background: Color = tuple(RENDER_DEFAULTS["background"]),
        focus_radius: float = float(SPOTLIGHT_DEFAULTS["focus_radius_px"]),
        dim_factor: float = float(SPOTLIGHT_DEFAULTS["dim_factor"]),
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.background = np.array(background, dtype=np.uint8)
        self.focus_radius = float(focus_radius)
        self.dim_factor = float(dim_factor)
        self.workers = int(workers)
        self._pool: Optional[ThreadPoolExecutor] = None

    def render(
        self,
        snap: FrameSnapshot,
        size: Tuple[int, int],
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Render ``snap`` at ``size`` = ``(width, height)``.

        ``out`` may be a preallocated ``(height, width, 4)`` buffer to reuse.
        """
        width, height = int(size[0]), int(size[1])
        if out is None or out.shape != (height, width, 4):
            out = np.empty((height, width, 4), dtype=np.uint8)
        if height == 0 or width == 0:
            return out

        if self.workers == 1 or height < self.workers:
            self._render_band(snap, out, 0, height)
            return out

        if self._pool is None:
            self._pool = ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="screenmark-render"
            )
        edges = np.linspace(0, height, self.workers + 1, dtype=int)
        futures = [
            self._pool.submit(self._render_band, snap, out, int(y0), int(y1))
            for y0, y1 in zip(edges[:-1], edges[1:])
        ]
        for fut in futures:
            fut.result()
        return out

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    # ------------------------------------------------------------------
    def _render_band(
        self, snap: FrameSnapshot, out: np.ndarray, y0: int, y1: int
    ) -> None:
        band = out[y0:y1]
        band[...] = self.background
        width = band.shape[1]
        img = snap.image
        img_h, img_w = img.shape[:2]

        sx = np.arange(width, dtype=np.float64)
        sy = np.arange(y0, y1, dtype=np.float64)
        fx = sx / snap.zoom + snap.offset[0]
        fy = sy / snap.zoom + snap.offset[1]
        cols = np.nonzero((fx >= 0.0) & (fx < img_w))[0]
        rows = np.nonzero((fy >= 0.0) & (fy < img_h))[0]
        if cols.size and rows.size:
            src_x = fx[cols].astype(np.intp)
            src_y = fy[rows].astype(np.intp)
            band[np.ix_(rows, cols)] = img[np.ix_(src_y, src_x)]

        if snap.spotlight:
            mx, my = snap.cursor
            d_sq = (sx[np.newaxis, :] - mx) ** 2 + (sy[:, np.newaxis] - my) ** 2
            outside = d_sq > self.focus_radius * self.focus_radius
            rgb = band[..., :3]
            dimmed = (rgb * self.dim_factor).astype(np.uint8)
            band[..., :3] = np.where(outside[..., np.newaxis], dimmed, rgb)
