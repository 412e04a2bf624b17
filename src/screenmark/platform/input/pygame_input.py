"""Pygame InputBackend translating native events into engine events.

Keys are matched by ``pygame.key.name()`` against the configured bindings,
so ``{"left ctrl": Action.TOGGLE_DRAW}`` binds the left control key. In
headless mode (dummy video) pygame delivers no real events; tests post
synthetic ones or call :meth:`PygameInputBackend.translate` directly.
"""

from __future__ import annotations

from typing import Any, Dict, Generator, Mapping, Optional

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

pg: Any = None
try:  # pragma: no cover - optional dependency in CI
    import pygame as _pg

    pg = _pg
except ImportError:  # pragma: no cover
    pg = None

_BUTTONS = {1: Button.LEFT, 3: Button.RIGHT}


def bindings_from_names(names: Mapping[str, str]) -> Dict[str, Action]:
    """Invert ``{action_name: key_name}`` into ``{key_name: Action}``."""
    out: Dict[str, Action] = {}
    for action_name, key_name in names.items():
        out[key_name.lower()] = Action(action_name)
    return out


class PygameInputBackend:
    """Collects pygame events and yields :data:`InputEvent` objects."""

    def __init__(self, bindings: Mapping[str, Action]) -> None:
        if pg is None:
            raise RuntimeError("pygame not available for input backend")
        self.bindings = {k.lower(): v for k, v in bindings.items()}

    def translate(self, ev: Any) -> Optional[InputEvent]:
        """Map one pygame event to an engine event, or None if irrelevant."""
        if ev.type == pg.QUIT:
            return CloseRequested()
        if ev.type == pg.MOUSEMOTION:
            return PointerMoved(float(ev.pos[0]), float(ev.pos[1]))
        if ev.type in (pg.MOUSEBUTTONDOWN, pg.MOUSEBUTTONUP):
            button = _BUTTONS.get(int(ev.button))
            if button is None:
                return None
            return PointerButton(button, ev.type == pg.MOUSEBUTTONDOWN)
        if ev.type == pg.MOUSEWHEEL:
            delta = float(getattr(ev, "precise_y", ev.y))
            return Scroll(delta) if delta else None
        if ev.type in (pg.KEYDOWN, pg.KEYUP):
            action = self.bindings.get(pg.key.name(ev.key).lower())
            if action is None:
                return None
            return KeyInput(action, ev.type == pg.KEYDOWN)
        if ev.type == pg.VIDEORESIZE:
            return Resized(int(ev.w), int(ev.h))
        return None

    def pump(self) -> Generator[InputEvent, None, None]:
        for ev in pg.event.get():
            out = self.translate(ev)
            if out is not None:
                yield out
