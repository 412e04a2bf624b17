"""
Frame loop controller for the screenmark overlay.

Provides an OverlayController that owns the frame tick: it drains input
into the engine, advances the view animation, snapshots the engine state,
renders it, and presents the result to the display backend.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Protocol

import numpy as np

from screenmark.core.engine import OverlayEngine
from screenmark.core.input import InputEvent, Resized
from screenmark.core.time import TimeSource
from screenmark.render.canvas import FrameSink, PresentationError
from screenmark.render.frame import FrameRenderer

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def pump(self) -> Iterable[InputEvent]:
        ...


class OverlayController:
    """Owns the frame loop; the only mutator of its engine."""

    def __init__(
        self,
        *,
        engine: OverlayEngine,
        display: FrameSink,
        renderer: FrameRenderer,
        ts: TimeSource,
        input_source: Optional[InputSource] = None,
        target_fps: float = 60.0,
        max_frames: Optional[int] = None,
    ) -> None:
        self.engine = engine
        self._display = display
        self._renderer = renderer
        self._ts = ts
        self._input = input_source
        self.target_fps = float(target_fps)
        self.max_frames = max_frames
        self.frames = 0
        self.error: Optional[PresentationError] = None
        self._frame: Optional[np.ndarray] = None
        self._running = False
        # Output follows the sink, not the captured image
        self.engine.output_size = self._display.size()

    @property
    def display(self) -> FrameSink:
        return self._display

    @property
    def renderer(self) -> FrameRenderer:
        return self._renderer

    @property
    def last_frame(self) -> Optional[np.ndarray]:
        return self._frame

    def dispatch(self, events: Iterable[InputEvent]) -> None:
        """Apply input events, keeping the sink size in step with resizes."""
        for ev in events:
            self.engine.handle(ev)
            if isinstance(ev, Resized):
                self._display.resize(ev.width, ev.height)
                self.engine.output_size = self._display.size()

    def tick(self) -> np.ndarray:
        """Run one frame synchronously and return the presented buffer."""
        if self._input is not None:
            self.dispatch(self._input.pump())
        self.engine.update()
        snap = self.engine.snapshot()
        self._frame = self._renderer.render(
            snap, self.engine.output_size, out=self._frame
        )
        self._display.present(self._frame)
        self.frames += 1
        return self._frame

    async def run(self) -> None:
        self._running = True
        dt_target = 1.0 / max(1e-6, self.target_fps)
        try:
            while self._running and self.engine.running:
                t0 = self._ts.monotonic()
                try:
                    self.tick()
                except PresentationError as e:
                    # Nothing durable to protect; stop the loop
                    logger.error("presentation failed, stopping: %s", e)
                    self.error = e
                    break
                if self.max_frames is not None and self.frames >= self.max_frames:
                    break

                # Frame pacing
                remaining = dt_target - max(0.0, self._ts.monotonic() - t0)
                if remaining > 0:
                    await self._ts.sleep(remaining)
                else:
                    # Yield to avoid starving other tasks
                    await asyncio.sleep(0)
        finally:
            self._running = False
            logger.info("frame loop exited after %d frame(s)", self.frames)

    def stop(self) -> None:
        self._running = False
