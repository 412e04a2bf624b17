"""Framework-agnostic presentation contract.

The overlay renders whole RGBA frames itself, so a display backend only has
to accept a finished ``(height, width, 4)`` ``uint8`` buffer once per tick
and report its current size. Different frameworks (pygame, offscreen test
doubles) can be plugged in behind this protocol.
"""

from __future__ import annotations

from typing import Protocol, Tuple

import numpy as np

Color = Tuple[int, int, int, int]


class PresentationError(RuntimeError):
    """Raised by a sink that can no longer present or resize frames."""


class FrameSink(Protocol):
    def size(self) -> Tuple[int, int]:
        """Current output ``(width, height)`` in screen pixels."""
        ...

    def resize(self, width: int, height: int) -> None:
        ...

    def present(self, frame: np.ndarray) -> None:
        ...

    def save_png(self, path: str) -> None:
        ...

    def close(self) -> None:
        ...
