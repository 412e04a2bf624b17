"""UI package: the frame loop controller."""

from .controllers import OverlayController  # re-export for convenience

__all__ = ["OverlayController"]
