from __future__ import annotations

import pytest

from dungeondraw.geometry.primitives import DoorSegment, WallSegment
from dungeondraw.render.config import RenderConfig, string_to_hex
from dungeondraw.render.linear import draw_door, draw_interior_wall, draw_linear_features
from dungeondraw.render.primitives import StrokePath, StrokePolygon


SHADED = RenderConfig(
    wall_thickness=4.0,
    wall_color="#111111",
    door_color="#222222",
    door_fill_color="#333333",
    door_fill_opacity=0.8,
    door_thickness=10.0,
    interior_shadow_opacity=0.5,
    interior_shadow_thickness=6.0,
)
UNSHADED = RenderConfig(wall_thickness=4.0, interior_shadow_opacity=0.0)


def _flat(subpaths) -> list:
    return [v for path in subpaths for pt in path for v in pt]


def test_vertical_wall_shadow_runs_on_canonical_segment() -> None:
    draws = draw_interior_wall(SHADED, WallSegment(50, 0, 50, 100))
    (shadow,) = draws.shadow
    # Canonical form is (50, 100) -> (50, 0); the stroke walks it back to front.
    assert shadow.subpaths == (((50.0, 0.0), (50.0, 100.0)),)
    (wall,) = draws.wall
    assert wall.subpaths == (((50.0, 0.0), (50.0, 100.0)),)
    assert wall.line.color == string_to_hex("#111111")


def test_wall_stroke_keeps_the_supplied_order() -> None:
    draws = draw_interior_wall(SHADED, WallSegment(100, 10, 0, 10))
    assert draws.wall[0].subpaths == (((100.0, 10.0), (0.0, 10.0)),)
    assert draws.shadow[0].subpaths == (((100.0, 10.0), (0.0, 10.0)),)


def test_rising_diagonal_wall_has_no_shadow() -> None:
    draws = draw_interior_wall(SHADED, WallSegment(0, 0, 60, 80))
    assert draws.shadow == []
    assert len(draws.wall) == 1


def test_wall_shadow_disabled_without_opacity() -> None:
    assert draw_interior_wall(UNSHADED, WallSegment(50, 0, 50, 100)).shadow == []


def test_door_draws_jambs_and_filled_panel() -> None:
    draws = draw_door(SHADED, DoorSegment(0, 0, 100, 0))
    jambs, panel = draws.wall
    assert isinstance(jambs, StrokePath)
    assert _flat(jambs.subpaths) == pytest.approx([0.0, 0.0, 20.0, 0.0, 80.0, 0.0, 100.0, 0.0])
    assert isinstance(panel, StrokePolygon)
    assert len(panel.points) == 5
    assert panel.points[0] == panel.points[-1]
    assert panel.line.color == string_to_hex("#222222")
    assert panel.fill is not None
    assert panel.fill.color == string_to_hex("#333333")
    assert panel.fill.alpha == 0.8


def test_door_panel_unfilled_without_fill_opacity() -> None:
    config = RenderConfig(door_fill_opacity=0.0, interior_shadow_opacity=None)
    _jambs, panel = draw_door(config, DoorSegment(0, 0, 100, 0)).wall
    assert panel.fill is None


def test_door_shadow_covers_both_jambs_regardless_of_direction() -> None:
    forward = draw_door(SHADED, DoorSegment(0, 0, 100, 0)).shadow
    backward = draw_door(SHADED, DoorSegment(100, 0, 0, 0)).shadow
    assert len(forward) == 1
    assert forward == backward
    assert _flat(forward[0].subpaths) == pytest.approx([100.0, 0.0, 80.0, 0.0, 20.0, 0.0, 0.0, 0.0])


def test_short_door_has_no_panel() -> None:
    draws = draw_door(SHADED, DoorSegment(0, 0, 30, 0))
    assert len(draws.wall) == 1
    assert isinstance(draws.wall[0], StrokePath)


def test_zero_length_door_draws_centerline_only() -> None:
    draws = draw_door(SHADED, DoorSegment(5, 5, 5, 5))
    assert draws.shadow == []
    (centerline,) = draws.wall
    assert centerline.subpaths == (((5.0, 5.0), (5.0, 5.0)),)


def test_linear_features_collects_walls_then_doors() -> None:
    draws = draw_linear_features(
        SHADED,
        [WallSegment(0, 0, 0, 100), WallSegment(0, 0, 100, 0)],
        [DoorSegment(0, 50, 100, 50)],
    )
    assert len(draws.wall) == 2 + 2
    assert len(draws.shadow) == 3
    assert draws.floor == []
