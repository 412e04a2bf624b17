"""Overlay application wiring (capture -> engine -> window -> frame loop).

This module assembles the collaborators described by a
:class:`~screenmark.config.RuntimeConfig` and runs the frame loop. Startup
failures (no image, no window) propagate as :class:`StartupError`; the CLI
turns them into a non-zero exit.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np

from screenmark.config import RuntimeConfig
from screenmark.core.engine import OverlayEngine
from screenmark.core.time import RealTimeSource, TimeSource
from screenmark.platform.capture import CaptureError, capture_screen, load_image
from screenmark.platform.display.pygame_backend import PygameDisplayBackend
from screenmark.platform.input.pygame_input import (
    PygameInputBackend,
    bindings_from_names,
)
from screenmark.render.canvas import PresentationError
from screenmark.render.frame import FrameRenderer
from screenmark.ui.controllers import OverlayController

logger = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The overlay could not be set up; nothing was shown."""


def acquire_image(cfg: RuntimeConfig) -> np.ndarray:
    try:
        if cfg.image_path:
            return load_image(cfg.image_path)
        return capture_screen()
    except CaptureError as e:
        raise StartupError(str(e)) from e


def build_controller(
    cfg: RuntimeConfig,
    image: np.ndarray,
    *,
    ts: Optional[TimeSource] = None,
) -> OverlayController:
    """Create engine, display, input and renderer for *image*."""
    if cfg.headless:
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    s = cfg.settings
    h, w = image.shape[:2]
    try:
        display = PygameDisplayBackend(
            size=(w, h), create_window=not cfg.headless, fullscreen=cfg.fullscreen
        )
    except (PresentationError, RuntimeError) as e:
        raise StartupError(str(e)) from e

    engine = OverlayEngine.from_settings(image, s, output_size=display.size())
    renderer = FrameRenderer(
        background=s.background_color,
        focus_radius=s.focus_radius_px,
        dim_factor=s.dim_factor,
        workers=s.render_workers,
    )
    input_source = PygameInputBackend(bindings_from_names(cfg.key_names()))
    return OverlayController(
        engine=engine,
        display=display,
        renderer=renderer,
        ts=ts if ts is not None else RealTimeSource(),
        input_source=input_source,
        target_fps=s.target_fps,
        max_frames=cfg.max_frames,
    )


async def main_async(cfg: RuntimeConfig, *, ts: Optional[TimeSource] = None) -> int:
    """Run the overlay until the user quits. Returns a process exit code."""
    image = acquire_image(cfg)
    controller = build_controller(cfg, image, ts=ts)
    try:
        await controller.run()
        if cfg.save_png and controller.last_frame is not None:
            controller.display.save_png(cfg.save_png)
            logger.info("saved last frame to %s", cfg.save_png)
    finally:
        controller.renderer.close()
        controller.display.close()
    return 1 if controller.error is not None else 0
