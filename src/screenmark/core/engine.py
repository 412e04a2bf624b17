"""Overlay engine: the single owner of all mutable annotation state.

The event-loop driver owns one :class:`OverlayEngine` and is its only
mutator. Per tick it feeds input events through :meth:`OverlayEngine.handle`,
advances the view animation with :meth:`OverlayEngine.update`, and takes a
:meth:`OverlayEngine.snapshot` for the renderer. Rendering only ever reads
the snapshot, so it cannot observe a half-built stroke or a torn
zoom/offset pair.

Input contract
--------------
- Outside drawing mode the left button pans the view.
- Inside drawing mode the left button draws and the right button erases.
  When both are held the eraser wins: pressing erase commits whatever has
  been drawn so far, pointer motion erases, and releasing erase resumes
  drawing from the current pointer position.
- Scrolling zooms around the pointer.
- Leaving drawing mode ends any active draw/erase gesture.
- Releasing a button that has no active gesture does nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from screenmark.core.brush import BrushRasterizer
from screenmark.core.input import (
    Action,
    Button,
    CloseRequested,
    InputEvent,
    KeyInput,
    PointerButton,
    PointerMoved,
    Resized,
    Scroll,
)
from screenmark.core.raster import Color, RasterCanvas
from screenmark.core.strokes import StrokeStore
from screenmark.core.view import Point, ViewTransform
from screenmark.render.frame import FrameSnapshot
from screenmark.settings.schema import Settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InputState:
    drawing_mode: bool = False
    is_drawing: bool = False
    is_erasing: bool = False
    is_panning: bool = False
    is_alt_pressed: bool = False
    last_mouse_pos: Point = (0.0, 0.0)
    # Anchor for continuous brush paths; None when no draw/erase gesture
    last_paint_pos: Optional[Point] = None


class OverlayEngine:
    """Annotation state container and input reaction logic."""

    def __init__(
        self,
        image: np.ndarray,
        *,
        output_size: Optional[Tuple[int, int]] = None,
        brush_size: float = 5.0,
        stroke_color: Color = (255, 0, 0, 255),
        view: Optional[ViewTransform] = None,
    ) -> None:
        self.canvas = RasterCanvas(image, stroke_color)
        self.view = view if view is not None else ViewTransform()
        self.brush = BrushRasterizer(self.view, self.canvas.size, brush_size=brush_size)
        self.strokes = StrokeStore(self.canvas, self.brush)
        self.input = InputState()
        self.output_size: Tuple[int, int] = (
            output_size if output_size is not None else self.canvas.size
        )
        self.running = True

    @classmethod
    def from_settings(
        cls,
        image: np.ndarray,
        settings: Settings,
        *,
        output_size: Optional[Tuple[int, int]] = None,
    ) -> "OverlayEngine":
        view = ViewTransform(
            smoothing_factor=settings.smoothing_factor,
            min_zoom=settings.min_zoom,
            max_zoom=settings.max_zoom,
            zoom_step=settings.zoom_step,
        )
        return cls(
            image,
            output_size=output_size,
            brush_size=settings.brush_size_px,
            stroke_color=settings.stroke_color,
            view=view,
        )

    # ------------------------------------------------------------------
    def handle(self, event: InputEvent) -> None:
        """Apply one input event. Never blocks; edge cases are absorbed."""
        if isinstance(event, PointerMoved):
            self._on_move((float(event.x), float(event.y)))
        elif isinstance(event, PointerButton):
            self._on_button(event.button, event.pressed)
        elif isinstance(event, Scroll):
            self.view.apply_zoom(float(event.delta), self.input.last_mouse_pos)
        elif isinstance(event, KeyInput):
            self._on_key(event.action, event.pressed)
        elif isinstance(event, Resized):
            self.output_size = (max(0, int(event.width)), max(0, int(event.height)))
        elif isinstance(event, CloseRequested):
            self.running = False

    def handle_all(self, events: Iterable[InputEvent]) -> None:
        for ev in events:
            self.handle(ev)

    def update(self) -> bool:
        """Advance the view animation by one tick."""
        return self.view.update()

    def snapshot(self) -> FrameSnapshot:
        """Freeze the state the next frame will show."""
        return FrameSnapshot(
            image=self.canvas.composite(self.strokes.current),
            zoom=self.view.zoom,
            offset=self.view.offset,
            spotlight=self.input.is_alt_pressed,
            cursor=self.input.last_mouse_pos,
        )

    def set_drawing_mode(self, enabled: bool) -> None:
        s = self.input
        if enabled == s.drawing_mode:
            return
        if enabled:
            s.is_panning = False
        else:
            if s.is_drawing or s.is_erasing:
                self.strokes.end_gesture()
            s.is_drawing = False
            s.is_erasing = False
            s.last_paint_pos = None
        s.drawing_mode = enabled
        logger.info("drawing mode %s", "on" if enabled else "off")

    # ------------------------------------------------------------------
    def _on_move(self, pos: Point) -> None:
        s = self.input
        if s.is_panning:
            last = s.last_mouse_pos
            self.view.apply_pan((pos[0] - last[0], pos[1] - last[1]))
        elif s.is_erasing:
            self.strokes.extend_gesture(s.last_paint_pos, pos, erasing=True)
            s.last_paint_pos = pos
        elif s.is_drawing:
            self.strokes.extend_gesture(s.last_paint_pos, pos)
            s.last_paint_pos = pos
        s.last_mouse_pos = pos

    def _on_button(self, button: Button, pressed: bool) -> None:
        s = self.input
        if not s.drawing_mode:
            if button is Button.LEFT:
                s.is_panning = pressed
            return
        if button is Button.LEFT:
            self._on_draw_button(pressed)
        elif button is Button.RIGHT:
            self._on_erase_button(pressed)

    def _on_draw_button(self, pressed: bool) -> None:
        s = self.input
        if pressed == s.is_drawing:
            return
        s.is_drawing = pressed
        if pressed:
            if not s.is_erasing:
                s.last_paint_pos = s.last_mouse_pos
                self.strokes.begin_gesture(s.last_mouse_pos)
            return
        self.strokes.end_gesture()
        if not s.is_erasing:
            s.last_paint_pos = None

    def _on_erase_button(self, pressed: bool) -> None:
        s = self.input
        if pressed == s.is_erasing:
            return
        s.is_erasing = pressed
        if pressed:
            # Eraser wins: bank the stroke in progress so it can be hit too
            self.strokes.end_gesture()
            s.last_paint_pos = s.last_mouse_pos
            self.strokes.begin_gesture(s.last_mouse_pos, erasing=True)
            return
        s.last_paint_pos = s.last_mouse_pos if s.is_drawing else None

    def _on_key(self, action: Action, pressed: bool) -> None:
        if action is Action.SPOTLIGHT:
            self.input.is_alt_pressed = pressed
            return
        if not pressed:
            return
        if action is Action.TOGGLE_DRAW:
            self.set_drawing_mode(not self.input.drawing_mode)
        elif action is Action.CLEAR:
            self.strokes.clear()
        elif action is Action.RESET_VIEW:
            self.view.reset()
        elif action is Action.QUIT:
            self.running = False
