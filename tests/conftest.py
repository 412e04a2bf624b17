from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from screenmark.core.engine import OverlayEngine

RED = (255, 0, 0, 255)


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # Keep settings reads/writes away from the real home directory
    home = tmp_path / "home"
    monkeypatch.setenv("SCREENMARK_HOME", str(home))
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    return home


@pytest.fixture
def make_image() -> Callable[[int, int], np.ndarray]:
    """Deterministic RGBA gradient with no pure-red pixels."""

    def _make(width: int = 40, height: int = 40) -> np.ndarray:
        ys, xs = np.mgrid[0:height, 0:width]
        img = np.empty((height, width, 4), dtype=np.uint8)
        img[..., 0] = (xs * 3) % 200
        img[..., 1] = (ys * 5) % 250
        img[..., 2] = 100
        img[..., 3] = 255
        return img

    return _make


@pytest.fixture
def engine(make_image: Callable[[int, int], np.ndarray]) -> OverlayEngine:
    return OverlayEngine(make_image(40, 40), output_size=(40, 40), stroke_color=RED)
