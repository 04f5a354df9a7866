from __future__ import annotations

import math

import pytest

from dungeondraw.errors import DegenerateDoorError
from dungeondraw.geometry.polygon2d import signed_area
from dungeondraw.geometry.primitives import DoorSegment
from dungeondraw.render.doors import JAMB_LENGTH, build_door_geometry, rectangle_for_segment


def test_horizontal_door_jambs_and_panel() -> None:
    g = build_door_geometry(DoorSegment(0, 0, 100, 0), door_thickness=10)
    assert g.jamb1_end == pytest.approx((20.0, 0.0))
    assert g.rect_end == pytest.approx((80.0, 0.0))
    assert g.panel is not None
    for x, y in g.panel:
        assert abs(y) == pytest.approx(5.0)
        assert 20.0 - 1e-9 <= x <= 80.0 + 1e-9


def test_vertical_door_panel_is_offset_in_x() -> None:
    g = build_door_geometry(DoorSegment(0, 0, 0, 100), door_thickness=10)
    assert g.jamb1_end == pytest.approx((0.0, 20.0))
    assert g.rect_end == pytest.approx((0.0, 80.0))
    assert g.panel is not None
    expected = [(-5.0, 20.0), (-5.0, 80.0), (5.0, 80.0), (5.0, 20.0)]
    for got, want in zip(g.panel, expected):
        assert got == pytest.approx(want)


def test_diagonal_door_panel_is_perpendicular_offset() -> None:
    g = build_door_geometry(DoorSegment(0, 0, 60, 80), door_thickness=10)
    assert g.jamb1_end == pytest.approx((12.0, 16.0))
    assert g.rect_end == pytest.approx((48.0, 64.0))
    assert g.panel is not None
    expected = [(8.0, 19.0), (44.0, 67.0), (52.0, 61.0), (16.0, 13.0)]
    for got, want in zip(g.panel, expected):
        assert got == pytest.approx(want)
    # 60 long, 10 thick, and the corner order does not self-intersect.
    assert abs(signed_area(g.panel)) == pytest.approx(600.0)


def test_rectangle_for_segment_horizontal_corner_order() -> None:
    assert rectangle_for_segment(20, 0, 80, 0, 10) == ((20, 5.0), (80, 5.0), (80, -5.0), (20, -5.0))


def test_jambs_cover_the_ends_of_the_door() -> None:
    g = build_door_geometry(DoorSegment(10, 10, 110, 10), door_thickness=6)
    (a0, a1), (b0, b1) = g.jambs
    assert a0 == (10.0, 10.0)
    assert math.dist(a0, a1) == pytest.approx(JAMB_LENGTH)
    assert b1 == (110.0, 10.0)
    assert math.dist(b0, b1) == pytest.approx(JAMB_LENGTH)


@pytest.mark.parametrize("length", [10.0, 30.0, 40.0])
def test_short_door_clamps_jambs_and_drops_panel(length: float) -> None:
    g = build_door_geometry(DoorSegment(0, 0, length, 0), door_thickness=10)
    assert g.panel is None
    assert g.jamb1_end == pytest.approx((length / 2.0, 0.0))
    assert g.rect_end == pytest.approx((length / 2.0, 0.0))
    for p in (g.jamb1_end, g.rect_end):
        assert all(math.isfinite(v) for v in p)


def test_zero_length_door_is_rejected() -> None:
    with pytest.raises(DegenerateDoorError):
        build_door_geometry(DoorSegment(5, 5, 5, 5), door_thickness=10)
