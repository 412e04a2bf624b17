"""Runtime configuration helpers.

Small aggregator that merges the packaged defaults (``settings.values``),
the persisted :class:`~screenmark.settings.schema.Settings`, and optional
CLI overrides into the :class:`RuntimeConfig` used by the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from .settings.schema import Settings
from .settings.store import SettingsStore

logger = logging.getLogger(__name__)

# CLI attribute -> Settings field
_OVERRIDES = {
    "brush_size": "brush_size_px",
    "focus_radius": "focus_radius_px",
    "fps": "target_fps",
    "workers": "render_workers",
}


@dataclass(slots=True)
class RuntimeConfig:
    settings: Settings
    image_path: Optional[str] = None
    headless: bool = False
    fullscreen: bool = True
    max_frames: Optional[int] = None
    save_png: Optional[str] = None

    def key_names(self) -> dict[str, str]:
        """``{action_name: key_name}`` for the configured bindings."""
        s = self.settings
        return {
            "toggle_draw": s.key_toggle_draw,
            "spotlight": s.key_spotlight,
            "clear": s.key_clear,
            "reset_view": s.key_reset_view,
            "quit": s.key_quit,
        }


def make_runtime_config(*, args: Optional[object] = None) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and optional *args*.

    *args* is argparse.Namespace-like; attributes that are missing or None
    leave the persisted value in place. Invalid overrides raise ValueError.
    """
    settings = SettingsStore.load()
    if args is None:
        return RuntimeConfig(settings=settings)

    updates = {}
    for attr, field_name in _OVERRIDES.items():
        v = getattr(args, attr, None)
        if v is not None:
            updates[field_name] = v
    if updates:
        try:
            settings = Settings.model_validate({**settings.model_dump(), **updates})
        except ValidationError as e:
            raise ValueError(f"invalid option: {e}") from e
        logger.debug("CLI overrides applied: %s", updates)

    return RuntimeConfig(
        settings=settings,
        image_path=getattr(args, "image", None),
        headless=bool(getattr(args, "headless", False)),
        fullscreen=not bool(getattr(args, "windowed", False)),
        max_frames=getattr(args, "frames", None),
        save_png=getattr(args, "save_png", None),
    )
