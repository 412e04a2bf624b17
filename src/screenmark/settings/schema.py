"""Pydantic model for user settings."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from .values import (
    BRUSH_DEFAULTS,
    KEY_BINDINGS,
    RENDER_DEFAULTS,
    SPOTLIGHT_DEFAULTS,
    VIEW_LIMITS,
)

Color = Tuple[int, int, int, int]


class Settings(BaseModel):
    """Overlay settings persisted to disk.

    Parameters
    ----------
    brush_size_px: Brush footprint in screen pixels. The image-space radius is
        ``max(1, brush_size_px / zoom)`` so strokes keep a constant apparent
        thickness on screen.
    focus_radius_px: Spotlight radius in screen pixels around the cursor.
    dim_factor: RGB multiplier applied outside the spotlight radius.
    smoothing_factor: Fraction of the remaining zoom/offset distance covered
        on every tick.
    stroke_color: RGBA colour used for committed and in-progress strokes.
    """

    brush_size_px: float = Field(default=float(BRUSH_DEFAULTS["size_px"]))
    focus_radius_px: float = Field(
        default=float(SPOTLIGHT_DEFAULTS["focus_radius_px"])
    )
    dim_factor: float = Field(default=float(SPOTLIGHT_DEFAULTS["dim_factor"]))
    smoothing_factor: float = Field(default=float(VIEW_LIMITS["smoothing_factor"]))
    min_zoom: float = Field(default=float(VIEW_LIMITS["min_zoom"]))
    max_zoom: float = Field(default=float(VIEW_LIMITS["max_zoom"]))
    zoom_step: float = Field(default=float(VIEW_LIMITS["zoom_step"]))
    stroke_color: Color = Field(default=tuple(BRUSH_DEFAULTS["stroke_color"]))
    background_color: Color = Field(default=tuple(RENDER_DEFAULTS["background"]))
    target_fps: float = Field(default=float(RENDER_DEFAULTS["target_fps"]))
    # Number of horizontal bands rendered concurrently per frame (1 = inline)
    render_workers: int = Field(default=int(RENDER_DEFAULTS["workers"]))
    # Key bindings by pygame key name (see pygame.key.name)
    key_toggle_draw: str = Field(default=KEY_BINDINGS["toggle_draw"])
    key_spotlight: str = Field(default=KEY_BINDINGS["spotlight"])
    key_clear: str = Field(default=KEY_BINDINGS["clear"])
    key_reset_view: str = Field(default=KEY_BINDINGS["reset_view"])
    key_quit: str = Field(default=KEY_BINDINGS["quit"])

    @field_validator("brush_size_px", "focus_radius_px", "target_fps")
    @classmethod
    def _chk_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("dim_factor")
    @classmethod
    def _chk_dim(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("dim_factor must be within [0, 1]")
        return v

    @field_validator("smoothing_factor")
    @classmethod
    def _chk_smoothing(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError("smoothing_factor must be within (0, 1]")
        return v

    @field_validator("render_workers")
    @classmethod
    def _chk_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("render_workers must be >= 1")
        return v

    @field_validator("stroke_color", "background_color")
    @classmethod
    def _chk_color(cls, v: Color) -> Color:
        if any(c < 0 or c > 255 for c in v):
            raise ValueError("colour channels must be within 0..255")
        return v

    @model_validator(mode="after")
    def _chk_zoom_range(self) -> "Settings":
        if not 0 < self.min_zoom < self.max_zoom:
            raise ValueError("zoom range requires 0 < min_zoom < max_zoom")
        return self
