"""Application package for screenmark."""

from . import overlay  # re-export the main application module

__all__ = ["overlay"]
