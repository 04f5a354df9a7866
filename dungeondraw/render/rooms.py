from __future__ import annotations

import logging
from typing import List, Sequence

from dungeondraw.geometry.primitives import Geometry, MultiPolygon, Point2, Polygon, Ring
from dungeondraw.render.config import RenderConfig, enabled
from dungeondraw.render.primitives import (
    FillPolygon,
    FillStyle,
    LayerDraws,
    LineStyle,
    Path2,
    StrokePath,
    StrokePolygon,
    as_path,
)
from dungeondraw.render.shadows import needs_shadow


logger = logging.getLogger(__name__)

MASK_FILL = FillStyle(color=0xFFFFFF, alpha=1.0)


def wall_line_style(config: RenderConfig, color_key: str = "wall_color") -> LineStyle:
    return LineStyle(
        width=config.wall_width,
        color=config.color(color_key),
        alpha=1.0,
        alignment=0.5,
    )


def shadow_line_style(config: RenderConfig, join: str = "round") -> LineStyle:
    return LineStyle(
        width=config.shadow_stroke_width,
        color=config.color("interior_shadow_color"),
        alpha=float(config.interior_shadow_opacity or 0.0),
        alignment=1.0,
        join=join,  # type: ignore[arg-type]
    )


def exterior_shadow_walk(coords: Sequence[Point2]) -> List[Path2]:
    """
    Walk consecutive vertex pairs; qualifying edges extend the current run and
    any other edge starts a new one, so runs stay disjoint.
    """
    runs: List[Path2] = []
    current: List[Point2] = [coords[0]]
    for prev, cur in zip(coords, coords[1:]):
        if needs_shadow(prev[0], prev[1], cur[0], cur[1]):
            current.append(cur)
        else:
            if len(current) >= 2:
                runs.append(as_path(current))
            current = [cur]
    if len(current) >= 2:
        runs.append(as_path(current))
    return runs


def hole_shadow_walk(coords: Sequence[Point2]) -> List[Path2]:
    return [as_path((a, b)) for a, b in zip(coords, coords[1:]) if needs_shadow(a[0], a[1], b[0], b[1])]


def _ring_path(ring: Ring) -> Path2:
    return as_path(ring.coords())


def draw_polygon_mask(polygon: Polygon) -> FillPolygon:
    return FillPolygon(
        exterior=_ring_path(polygon.exterior),
        holes=tuple(_ring_path(h) for h in polygon.holes),
        fill=MASK_FILL,
    )


def draw_polygon_room(config: RenderConfig, polygon: Polygon) -> LayerDraws:
    draws = LayerDraws()
    coords = polygon.exterior.coords()
    holes = [h.coords() for h in polygon.holes]

    # Holes are always cut; with a texture the floor comes from the masked tiles instead.
    if not config.floor_texture:
        draws.floor.append(
            FillPolygon(
                exterior=as_path(coords),
                holes=tuple(as_path(h) for h in holes),
                fill=FillStyle(color=config.color("floor_color"), alpha=1.0),
            )
        )

    shadows_on = enabled(config.interior_shadow_opacity)
    if shadows_on:
        runs = exterior_shadow_walk(coords)
        if runs:
            draws.shadow.append(StrokePath(subpaths=tuple(runs), line=shadow_line_style(config)))

    draws.wall.append(StrokePolygon(points=as_path(coords), line=wall_line_style(config)))

    for hole in holes:
        if shadows_on:
            edges = hole_shadow_walk(hole)
            if edges:
                draws.shadow.append(StrokePath(subpaths=tuple(edges), line=shadow_line_style(config, join="miter")))
        draws.wall.append(StrokePolygon(points=as_path(hole), line=wall_line_style(config)))

    return draws


def draw_geometry_room(config: RenderConfig, geometry: Geometry) -> LayerDraws:
    draws = LayerDraws()
    match geometry:
        case Polygon():
            draws.extend(draw_polygon_room(config, geometry))
        case MultiPolygon(polygons=polygons):
            for polygon in polygons:
                draws.extend(draw_polygon_room(config, polygon))
        case _:
            logger.warning("Skipping room drawing for unsupported geometry %s", type(geometry).__name__)
    return draws


def draw_geometry_mask(geometry: Geometry) -> List[FillPolygon]:
    match geometry:
        case Polygon():
            return [draw_polygon_mask(geometry)]
        case MultiPolygon(polygons=polygons):
            return [draw_polygon_mask(p) for p in polygons]
        case _:
            return []
