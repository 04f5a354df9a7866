from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry import box
from shapely.geometry.base import BaseGeometry

from dungeondraw.errors import DegenerateGeometryError, GeometryError
from dungeondraw.geometry.primitives import Geometry, MultiPolygon, Point2, Polygon, Ring
from dungeondraw.geometry.tolerance import EPS_AREA


Rect = Tuple[float, float, float, float]


def slope(x1: float, y1: float, x2: float, y2: float) -> float:
    """Rise over run; vertical segments give +inf. A zero-length segment has no slope."""
    if x1 == x2:
        if y1 == y2:
            raise DegenerateGeometryError(f"slope of zero-length segment at ({x1}, {y1})")
        return math.inf
    return (y2 - y1) / (x2 - x1)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def points_to_polygon(points: Sequence[Point2]) -> ShapelyPolygon:
    return ShapelyPolygon([(float(x), float(y)) for x, y in points])


def rect_polygon(rect: Rect) -> ShapelyPolygon:
    x0, y0, x1, y1 = rect
    return box(float(x0), float(y0), float(x1), float(y1))


def _polygon_to_shapely(polygon: Polygon) -> ShapelyPolygon:
    return ShapelyPolygon(list(polygon.exterior.points), [list(h.points) for h in polygon.holes])


def to_shapely(geometry: Geometry | BaseGeometry) -> BaseGeometry:
    match geometry:
        case BaseGeometry():
            return geometry
        case Polygon():
            return _polygon_to_shapely(geometry)
        case MultiPolygon(polygons=polygons):
            return ShapelyMultiPolygon([_polygon_to_shapely(p) for p in polygons])
        case _:
            raise GeometryError(f"unsupported geometry variant: {type(geometry).__name__}")


def _polygon_from_shapely(geom: ShapelyPolygon) -> Polygon:
    ext = [(float(x), float(y)) for x, y in geom.exterior.coords]
    holes = [[(float(x), float(y)) for x, y in interior.coords] for interior in geom.interiors]
    return Polygon(exterior=Ring(tuple(ext)), holes=tuple(Ring(tuple(h)) for h in holes))


def from_shapely(geom: BaseGeometry) -> Geometry:
    if geom is None or geom.is_empty:
        return None
    if isinstance(geom, ShapelyPolygon):
        return _polygon_from_shapely(geom)
    if isinstance(geom, ShapelyMultiPolygon):
        return MultiPolygon(tuple(_polygon_from_shapely(g) for g in geom.geoms))
    raise GeometryError(f"unsupported shapely geometry: {geom.geom_type}")


def buffer_outward(polygon: Polygon, thickness: float) -> Polygon:
    """
    Grow a polygon outward by ``thickness`` (round joins). Holes shrink by the
    same amount and vanish when they close up.
    """
    if float(thickness) <= 0.0:
        return polygon
    grown = _polygon_to_shapely(polygon).buffer(float(thickness))
    if grown.is_empty or grown.area <= EPS_AREA:
        raise GeometryError("outward buffer produced an empty polygon")
    if isinstance(grown, ShapelyMultiPolygon):
        geoms = list(grown.geoms)
        if len(geoms) != 1:
            raise GeometryError("outward buffer produced multiple disjoint polygons")
        grown = geoms[0]
    if not isinstance(grown, ShapelyPolygon):
        raise GeometryError(f"outward buffer produced {grown.geom_type}")
    return _polygon_from_shapely(grown)


def cell_intersects_geometry(geometry: Geometry | BaseGeometry, rect: Rect) -> bool:
    """True when the cell overlaps the floor area; sharing only an edge or corner does not count."""
    cell = rect_polygon(rect)
    shape = to_shapely(geometry)
    return bool(shape.intersects(cell) and not shape.touches(cell))


def geometry_extent(geometry: Geometry | BaseGeometry) -> Optional[Tuple[float, float]]:
    """Max x and max y of the geometry, or None when it is empty."""
    if geometry is None:
        return None
    shape = to_shapely(geometry)
    if shape.is_empty:
        return None
    _minx, _miny, maxx, maxy = shape.bounds
    if not (math.isfinite(maxx) and math.isfinite(maxy)):
        return None
    return float(maxx), float(maxy)
