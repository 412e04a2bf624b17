"""Capture sources producing the immutable RGBA raster the overlay annotates.

Both helpers return a ``(height, width, 4)`` ``uint8`` numpy array. Any
failure raises :class:`CaptureError`, which is fatal to startup.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageGrab, UnidentifiedImageError

logger = logging.getLogger(__name__)


class CaptureError(RuntimeError):
    """No usable image could be obtained at startup."""


def _to_rgba_array(img: Image.Image) -> np.ndarray:
    arr = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise CaptureError("captured image is empty")
    return np.ascontiguousarray(arr)


def capture_screen() -> np.ndarray:
    """Grab the primary display."""
    try:
        img = ImageGrab.grab()
    except OSError as e:
        raise CaptureError(f"screen capture failed: {e}") from e
    if img is None:
        raise CaptureError("no capture source available")
    arr = _to_rgba_array(img)
    logger.info("captured screen %dx%d", arr.shape[1], arr.shape[0])
    return arr


def load_image(path: str | Path) -> np.ndarray:
    """Load an existing screenshot from disk instead of capturing."""
    p = Path(path)
    try:
        with Image.open(p) as img:
            arr = _to_rgba_array(img)
    except FileNotFoundError as e:
        raise CaptureError(f"image not found: {p}") from e
    except (OSError, UnidentifiedImageError) as e:
        raise CaptureError(f"failed to read image {p}: {e}") from e
    logger.info("loaded %s (%dx%d)", p, arr.shape[1], arr.shape[0])
    return arr
