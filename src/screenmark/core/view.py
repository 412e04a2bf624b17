"""Animated screen <-> image coordinate mapping.

The view keeps two copies of its zoom and offset: the *target* that input
handlers mutate, and the *current* values that trail the target through
exponential smoothing. All coordinate conversions use the current values so
that brush placement always matches what is on screen, even mid-animation.

Coordinates
-----------
- Screen space: pixels of the rendered output buffer, origin top-left.
- Image space: pixels of the captured raster, independent of zoom/pan.
- ``offset`` is the image-space point shown at the screen origin, so
  ``image = screen / zoom + offset``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from screenmark.settings.values import VIEW_LIMITS

Point = Tuple[float, float]


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass(slots=True)
class ViewTransform:
    """Owns current and target zoom/offset and advances them each tick."""

    zoom: float = 1.0
    target_zoom: float = 1.0
    offset: Point = (0.0, 0.0)
    target_offset: Point = (0.0, 0.0)
    smoothing_factor: float = float(VIEW_LIMITS["smoothing_factor"])
    min_zoom: float = float(VIEW_LIMITS["min_zoom"])
    max_zoom: float = float(VIEW_LIMITS["max_zoom"])
    zoom_step: float = float(VIEW_LIMITS["zoom_step"])
    snap_threshold: float = float(VIEW_LIMITS["snap_threshold"])

    def __post_init__(self) -> None:
        if not 0.0 < self.smoothing_factor <= 1.0:
            raise ValueError("smoothing_factor must be within (0, 1]")
        self.zoom = _clamp(self.zoom, self.min_zoom, self.max_zoom)
        self.target_zoom = _clamp(self.target_zoom, self.min_zoom, self.max_zoom)

    # ------------------------------------------------------------------
    def screen_to_image(self, sx: float, sy: float) -> Point:
        """Map a screen point to image space using the current zoom/offset."""
        return (sx / self.zoom + self.offset[0], sy / self.zoom + self.offset[1])

    def image_to_screen(self, ix: float, iy: float) -> Point:
        """Inverse of :meth:`screen_to_image`."""
        return ((ix - self.offset[0]) * self.zoom, (iy - self.offset[1]) * self.zoom)

    def brush_radius(self, brush_size: float) -> float:
        """Image-space radius of a brush that is ``brush_size`` screen px wide."""
        return max(1.0, brush_size / self.zoom)

    # ------------------------------------------------------------------
    def apply_zoom(self, scroll_delta: float, anchor: Point) -> None:
        """Zoom the target around ``anchor`` (screen space).

        The image point under the anchor at the old target zoom stays under
        the anchor once the new target zoom has been reached.
        """
        old = self.target_zoom
        new = _clamp(
            old * (1.0 + scroll_delta * self.zoom_step), self.min_zoom, self.max_zoom
        )
        self.target_zoom = new
        ax, ay = anchor
        tx, ty = self.target_offset
        self.target_offset = (tx + ax / old - ax / new, ty + ay / old - ay / new)

    def apply_pan(self, delta: Point) -> None:
        """Shift the target by a screen-space drag measured at the current zoom."""
        tx, ty = self.target_offset
        self.target_offset = (tx - delta[0] / self.zoom, ty - delta[1] / self.zoom)

    def reset(self) -> None:
        """Animate back to 1:1 zoom at the image origin."""
        self.target_zoom = _clamp(1.0, self.min_zoom, self.max_zoom)
        self.target_offset = (0.0, 0.0)

    def update(self) -> bool:
        """Advance one tick toward the target.

        Returns True while the view is still animating.
        """
        dz = self.target_zoom - self.zoom
        dx = self.target_offset[0] - self.offset[0]
        dy = self.target_offset[1] - self.offset[1]
        eps = self.snap_threshold
        if abs(dz) < eps and abs(dx) < eps and abs(dy) < eps:
            # Snap so the easing settles instead of drifting asymptotically
            self.zoom = self.target_zoom
            self.offset = self.target_offset
            return False

        k = self.smoothing_factor
        self.zoom = _clamp(self.zoom + dz * k, self.min_zoom, self.max_zoom)
        self.offset = (self.offset[0] + dx * k, self.offset[1] + dy * k)
        return True

    @property
    def animating(self) -> bool:
        """Whether current zoom/offset still differ from the target."""
        return self.zoom != self.target_zoom or self.offset != self.target_offset
