from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image, ImageGrab

from screenmark.platform.capture import CaptureError, capture_screen, load_image


def test_load_image_converts_to_rgba(tmp_path: Path) -> None:
    path = tmp_path / "shot.png"
    Image.new("RGB", (7, 5), (10, 20, 30)).save(path)
    arr = load_image(path)
    assert arr.shape == (5, 7, 4)
    assert arr.dtype == np.uint8
    assert tuple(arr[4, 6]) == (10, 20, 30, 255)
    assert arr.flags["C_CONTIGUOUS"]


def test_load_image_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CaptureError):
        load_image(tmp_path / "nope.png")


def test_load_image_not_an_image(tmp_path: Path) -> None:
    path = tmp_path / "notes.png"
    path.write_text("definitely not a png")
    with pytest.raises(CaptureError):
        load_image(path)


def test_capture_screen_uses_grab(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        ImageGrab, "grab", lambda *a, **k: Image.new("RGB", (4, 3), (1, 2, 3))
    )
    arr = capture_screen()
    assert arr.shape == (3, 4, 4)
    assert tuple(arr[0, 0]) == (1, 2, 3, 255)


def test_capture_screen_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*a: object, **k: object) -> Image.Image:
        raise OSError("X connection failed")

    monkeypatch.setattr(ImageGrab, "grab", _boom)
    with pytest.raises(CaptureError):
        capture_screen()


def test_capture_screen_without_source(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ImageGrab, "grab", lambda *a, **k: None)
    with pytest.raises(CaptureError):
        capture_screen()
