from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import given, settings

from screenmark.core.brush import BrushRasterizer, line_path, stamp
from screenmark.core.view import ViewTransform


def test_stamp_radius_one_is_a_plus() -> None:
    px = stamp((5.0, 5.0), 1.0, (40, 40))
    assert px == {(5, 5), (4, 5), (6, 5), (5, 4), (5, 6)}


def test_stamp_is_inclusive_on_the_radius() -> None:
    px = stamp((10.0, 10.0), 5.0, (40, 40))
    assert (15, 10) in px
    assert (10, 5) in px
    assert (14, 14) not in px  # 4^2 + 4^2 = 32 > 25
    assert (13, 14) in px  # 3^2 + 4^2 = 25


def test_stamp_fractional_center() -> None:
    px = stamp((2.5, 2.5), 1.0, (40, 40))
    # Only the four pixels at distance sqrt(0.5) qualify
    assert px == {(2, 2), (3, 2), (2, 3), (3, 3)}


def test_stamp_clips_to_bounds() -> None:
    px = stamp((0.0, 0.0), 3.0, (10, 10))
    assert all(0 <= x < 10 and 0 <= y < 10 for x, y in px)
    assert (0, 0) in px
    assert stamp((-50.0, -50.0), 3.0, (10, 10)) == frozenset()


def test_line_path_vertical() -> None:
    pts = list(line_path((5.0, 5.0), (5.0, 20.0)))
    assert pts == [(5.0, float(y)) for y in range(5, 21)]


def test_line_path_single_point() -> None:
    assert list(line_path((3.0, 4.0), (3.0, 4.0))) == [(3.0, 4.0)]


def test_line_path_diagonal_and_reverse() -> None:
    fwd = list(line_path((0.0, 0.0), (4.0, 4.0)))
    assert fwd == [(float(i), float(i)) for i in range(5)]
    back = list(line_path((4.0, 0.0), (0.0, 2.0)))
    assert back[0] == (4.0, 0.0)
    assert back[-1] == (0.0, 2.0)


def test_trace_line_follows_zoom() -> None:
    view = ViewTransform(zoom=2.0, target_zoom=2.0)
    brush = BrushRasterizer(view, (40, 40), brush_size=2.0)
    px = brush.trace_line((10.0, 10.0), (20.0, 10.0))
    # radius max(1, 2/2) = 1, screen x 10..20 -> image x 5..10 at y 5
    assert {(x, 5) for x in range(5, 11)} <= px
    assert max(x for x, _ in px) == 11
    assert {y for _, y in px} == {4, 5, 6}


def test_footprint_matches_erase_and_draw() -> None:
    view = ViewTransform(zoom=0.5, target_zoom=0.5, offset=(2.0, 3.0))
    brush = BrushRasterizer(view, (100, 100), brush_size=5.0)
    center, radius = brush.footprint((4.0, 6.0))
    assert center == (10.0, 15.0)
    assert radius == 10.0


coord = st.integers(min_value=-300, max_value=300)


@settings(deadline=None, max_examples=200)
@given(x0=coord, y0=coord, x1=coord, y1=coord)
def test_line_path_is_continuous(x0: int, y0: int, x1: int, y1: int) -> None:
    pts = list(line_path((float(x0), float(y0)), (float(x1), float(y1))))
    assert pts[0] == (x0, y0)
    assert abs(pts[-1][0] - x1) < 1.0 and abs(pts[-1][1] - y1) < 1.0
    for (ax, ay), (bx, by) in zip(pts, pts[1:]):
        assert abs(bx - ax) <= 1.0 and abs(by - ay) <= 1.0
        assert (ax, ay) != (bx, by)
