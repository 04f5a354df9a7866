from __future__ import annotations

import logging
from typing import Iterable

from dungeondraw.errors import DegenerateDoorError
from dungeondraw.geometry.primitives import DoorSegment, WallSegment
from dungeondraw.render.config import RenderConfig, enabled, string_to_hex
from dungeondraw.render.doors import JAMB_LENGTH, build_door_geometry
from dungeondraw.render.primitives import FillStyle, LayerDraws, StrokePath, StrokePolygon, as_path
from dungeondraw.render.rooms import shadow_line_style, wall_line_style
from dungeondraw.render.shadows import canonicalize, segment_needs_shadow


logger = logging.getLogger(__name__)


def draw_interior_wall(config: RenderConfig, wall: WallSegment) -> LayerDraws:
    draws = LayerDraws()
    if enabled(config.interior_shadow_opacity) and segment_needs_shadow(wall):
        c = canonicalize(wall)
        draws.shadow.append(StrokePath(subpaths=(as_path((c.end, c.start)),), line=shadow_line_style(config)))
    draws.wall.append(StrokePath(subpaths=(as_path((wall.start, wall.end)),), line=wall_line_style(config)))
    return draws


def draw_door(config: RenderConfig, door: DoorSegment, jamb_length: float = JAMB_LENGTH) -> LayerDraws:
    draws = LayerDraws()
    try:
        geom = build_door_geometry(door, config.door_width, jamb_length)
    except DegenerateDoorError as exc:
        logger.warning("Door drawn as centerline only: %s", exc)
        draws.wall.append(StrokePath(subpaths=(as_path((door.start, door.end)),), line=wall_line_style(config)))
        return draws

    if enabled(config.interior_shadow_opacity) and segment_needs_shadow(door):
        # Shadows follow the canonical door; panel edges get none.
        c = build_door_geometry(canonicalize(door), config.door_width, jamb_length)
        draws.shadow.append(
            StrokePath(
                subpaths=(as_path((c.end, c.rect_end)), as_path((c.jamb1_end, c.start))),
                line=shadow_line_style(config),
            )
        )

    draws.wall.append(StrokePath(subpaths=tuple(as_path(j) for j in geom.jambs), line=wall_line_style(config)))

    if geom.panel is not None:
        fill = None
        if enabled(config.door_fill_opacity) and config.door_fill_color:
            fill = FillStyle(color=string_to_hex(config.door_fill_color), alpha=float(config.door_fill_opacity))
        draws.wall.append(
            StrokePolygon(
                points=as_path((*geom.panel, geom.panel[0])),
                line=wall_line_style(config, color_key="door_color"),
                fill=fill,
            )
        )
    return draws


def draw_linear_features(
    config: RenderConfig,
    walls: Iterable[WallSegment],
    doors: Iterable[DoorSegment],
) -> LayerDraws:
    draws = LayerDraws()
    n_walls = n_doors = 0
    for wall in walls:
        draws.extend(draw_interior_wall(config, wall))
        n_walls += 1
    for door in doors:
        draws.extend(draw_door(config, door))
        n_doors += 1
    logger.debug("Drew %d interior walls and %d doors", n_walls, n_doors)
    return draws
