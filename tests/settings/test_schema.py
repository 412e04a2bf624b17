from __future__ import annotations

import pytest
from pydantic import ValidationError

from screenmark.settings.schema import Settings
from screenmark.settings.values import (
    BRUSH_DEFAULTS,
    KEY_BINDINGS,
    RENDER_DEFAULTS,
    SPOTLIGHT_DEFAULTS,
    VIEW_LIMITS,
)


def test_packaged_defaults() -> None:
    assert BRUSH_DEFAULTS["size_px"] == 5.0
    assert BRUSH_DEFAULTS["stroke_color"] == [255, 0, 0, 255]
    assert SPOTLIGHT_DEFAULTS == {"focus_radius_px": 125.0, "dim_factor": 0.25}
    assert VIEW_LIMITS["min_zoom"] == pytest.approx(0.1)
    assert VIEW_LIMITS["max_zoom"] == 10.0
    assert VIEW_LIMITS["zoom_step"] == pytest.approx(0.1)
    assert VIEW_LIMITS["smoothing_factor"] == pytest.approx(0.2)
    assert RENDER_DEFAULTS["background"] == [64, 64, 64, 255]
    assert KEY_BINDINGS["quit"] == "escape"


def test_settings_defaults_follow_values() -> None:
    s = Settings()
    assert s.stroke_color == (255, 0, 0, 255)
    assert s.background_color == (64, 64, 64, 255)
    assert s.render_workers == 1
    assert s.key_toggle_draw == "left ctrl"
    assert s.key_spotlight == "left alt"


@pytest.mark.parametrize(
    "field, value",
    [
        ("brush_size_px", 0.0),
        ("focus_radius_px", -1.0),
        ("target_fps", 0.0),
        ("dim_factor", 1.5),
        ("smoothing_factor", 0.0),
        ("render_workers", 0),
        ("stroke_color", (256, 0, 0, 255)),
    ],
)
def test_rejects_invalid(field: str, value: object) -> None:
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_zoom_range_must_be_ordered() -> None:
    with pytest.raises(ValidationError):
        Settings(min_zoom=5.0, max_zoom=2.0)
    s = Settings(min_zoom=0.5, max_zoom=4.0)
    assert (s.min_zoom, s.max_zoom) == (0.5, 4.0)
