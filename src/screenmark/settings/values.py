"""Centralized default values loaded from YAML.

The master source is ``values.yml`` in this package. On import we load and
parse it; a missing or malformed file falls back to the hard-coded
literals below so the overlay can still start with the historical defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_BRUSH = {"size_px": 5.0, "stroke_color": [255, 0, 0, 255]}
_FALLBACK_SPOTLIGHT = {"focus_radius_px": 125.0, "dim_factor": 0.25}
_FALLBACK_VIEW = {
    "min_zoom": 0.1,
    "max_zoom": 10.0,
    "zoom_step": 0.1,
    "smoothing_factor": 0.2,
    "snap_threshold": 0.001,
}
_FALLBACK_RENDER = {
    "background": [64, 64, 64, 255],
    "target_fps": 60.0,
    "workers": 1,
}
_FALLBACK_KEYS = {
    "toggle_draw": "left ctrl",
    "spotlight": "left alt",
    "clear": "c",
    "reset_view": "r",
    "quit": "escape",
}

_brush: Dict[str, Any] = dict(_FALLBACK_BRUSH)
_spotlight: Dict[str, Any] = dict(_FALLBACK_SPOTLIGHT)
_view: Dict[str, float] = dict(_FALLBACK_VIEW)
_render: Dict[str, Any] = dict(_FALLBACK_RENDER)
_keys: Dict[str, str] = dict(_FALLBACK_KEYS)


def _is_color(v: object) -> bool:
    return (
        isinstance(v, (list, tuple))
        and len(v) == 4
        and all(isinstance(c, int) and 0 <= c <= 255 for c in v)
    )


def _merge_numbers(dst: Dict[str, Any], src: object) -> None:
    if not isinstance(src, dict):
        return
    for k in list(dst):
        v = src.get(k)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            dst[k] = type(dst[k])(v) if isinstance(dst[k], (int, float)) else v


if _YAML_PATH.exists():  # pragma: no branch - simple path
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        brush = raw.get("brush", {})
        _merge_numbers(_brush, brush)
        if isinstance(brush, dict) and _is_color(brush.get("stroke_color")):
            _brush["stroke_color"] = list(brush["stroke_color"])
        _merge_numbers(_spotlight, raw.get("spotlight", {}))
        _merge_numbers(_view, raw.get("view", {}))
        render = raw.get("render", {})
        _merge_numbers(_render, render)
        if isinstance(render, dict) and _is_color(render.get("background")):
            _render["background"] = list(render["background"])
        keys = raw.get("keys", {})
        if isinstance(keys, dict):
            _keys.update({k: v for k, v in keys.items() if isinstance(v, str)})
    except (OSError, yaml.YAMLError, AttributeError) as e:
        logger.warning("failed to parse %s, using built-in defaults: %s", _YAML_PATH, e)

# --- Public accessors ----------------------------------------------------
BRUSH_DEFAULTS: Dict[str, Any] = dict(_brush)
SPOTLIGHT_DEFAULTS: Dict[str, Any] = dict(_spotlight)
VIEW_LIMITS: Dict[str, float] = dict(_view)
RENDER_DEFAULTS: Dict[str, Any] = dict(_render)
KEY_BINDINGS: Dict[str, str] = dict(_keys)

__all__ = [
    "BRUSH_DEFAULTS",
    "SPOTLIGHT_DEFAULTS",
    "VIEW_LIMITS",
    "RENDER_DEFAULTS",
    "KEY_BINDINGS",
]
