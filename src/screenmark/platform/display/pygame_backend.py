"""Pygame-based frame sink with headless (offscreen) support.

The overlay renders complete RGBA frames with numpy; this backend copies
each one into an offscreen surface and, when a window exists, blits and
flips it. Setting ``SDL_VIDEODRIVER=dummy`` before constructing the backend
keeps everything offscreen, which is what the tests do.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from screenmark.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(320, 240))
    backend.present(frame)            # frame: (240, 320, 4) uint8
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Tuple

import numpy as np

from screenmark.render.canvas import FrameSink, PresentationError

logger = logging.getLogger(__name__)

pg: Any = None
try:  # pragma: no cover - import guard for environments without SDL
    import pygame as _pg

    pg = _pg
except ImportError:  # pragma: no cover
    pg = None


def _headless() -> bool:
    return os.environ.get("SDL_VIDEODRIVER") == "dummy"


class PygameDisplayBackend(FrameSink):
    """Pygame implementation of :class:`FrameSink`.

    With ``create_window`` a borderless window is opened (fullscreen when
    ``fullscreen`` is set, matching the captured display); otherwise only an
    offscreen surface is kept.
    """

    def __init__(
        self,
        size: Tuple[int, int] = (320, 240),
        *,
        create_window: bool = False,
        fullscreen: bool = False,
        caption: str = "screenmark",
    ) -> None:
        local_pg = pg
        if local_pg is None:
            raise RuntimeError(
                "pygame is not available. "
                "Ensure it is installed and that SDL is configured."
            )
        if _headless():
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        if not local_pg.get_init():
            local_pg.init()

        self._width, self._height = int(size[0]), int(size[1])
        self._fullscreen = bool(fullscreen)
        self._window_surface = None
        if create_window and not _headless():
            try:
                self._window_surface = local_pg.display.set_mode(
                    (self._width, self._height), self._window_flags()
                )
                local_pg.display.set_caption(caption)
            except local_pg.error as e:
                raise PresentationError(f"window creation failed: {e}") from e
        self._surface = local_pg.Surface(
            (self._width, self._height), flags=local_pg.SRCALPHA
        )

    def _window_flags(self) -> int:
        if self._fullscreen:
            return int(pg.NOFRAME | pg.FULLSCREEN)
        return int(pg.RESIZABLE)

    @property
    def has_window(self) -> bool:
        return self._window_surface is not None

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        width, height = max(1, int(width)), max(1, int(height))
        if (width, height) == (self._width, self._height):
            return
        try:
            if self._window_surface is not None and not self._fullscreen:
                self._window_surface = pg.display.set_mode(
                    (width, height), self._window_flags()
                )
            self._surface = pg.Surface((width, height), flags=pg.SRCALPHA)
        except pg.error as e:
            raise PresentationError(f"resize to {width}x{height} failed: {e}") from e
        self._width, self._height = width, height
        logger.debug("display resized to %dx%d", width, height)

    def present(self, frame: np.ndarray) -> None:
        h, w = frame.shape[:2]
        if (w, h) != (self._width, self._height):
            raise PresentationError(
                f"frame is {w}x{h} but the display is {self._width}x{self._height}"
            )
        try:
            # frombuffer keeps a reference to the bytes, so the copy stays valid
            self._surface = pg.image.frombuffer(
                np.ascontiguousarray(frame).tobytes(), (w, h), "RGBA"
            )
            if self._window_surface is not None:
                self._window_surface.fill((0, 0, 0))
                self._window_surface.blit(self._surface, (0, 0))
                pg.display.flip()
        except pg.error as e:
            raise PresentationError(f"present failed: {e}") from e

    def save_png(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        pg.image.save(self._surface, path)

    def close(self) -> None:
        if self._window_surface is not None:
            pg.display.quit()
            self._window_surface = None
