"""Framework-neutral input events consumed by the overlay engine.

Platform backends (see ``screenmark.platform.input``) translate native
events into these dataclasses; the engine never sees pygame objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Button(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Action(str, Enum):
    """Logical keys the overlay reacts to."""

    TOGGLE_DRAW = "toggle_draw"
    SPOTLIGHT = "spotlight"
    CLEAR = "clear"
    RESET_VIEW = "reset_view"
    QUIT = "quit"


@dataclass(frozen=True, slots=True)
class PointerMoved:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PointerButton:
    button: Button
    pressed: bool


@dataclass(frozen=True, slots=True)
class Scroll:
    delta: float  # positive zooms in


@dataclass(frozen=True, slots=True)
class KeyInput:
    action: Action
    pressed: bool


@dataclass(frozen=True, slots=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class CloseRequested:
    pass


InputEvent = Union[
    PointerMoved, PointerButton, Scroll, KeyInput, Resized, CloseRequested
]
