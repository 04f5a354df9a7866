from __future__ import annotations

from typing import List, Sequence

from dungeondraw.geometry.primitives import Point2, Polygon, Ring


def _open_points(points: Sequence[Point2]) -> List[Point2]:
    pts = list(points)
    if len(pts) >= 2 and pts[0] == pts[-1]:
        pts.pop()
    return pts


def signed_area(points: Sequence[Point2]) -> float:
    """Shoelace area; positive for counter-clockwise in a y-up frame."""
    poly = _open_points(points)
    if len(poly) < 3:
        return 0.0
    s = 0.0
    for i in range(len(poly)):
        x1, y1 = poly[i]
        x2, y2 = poly[(i + 1) % len(poly)]
        s += x1 * y2 - x2 * y1
    return 0.5 * s


def ring_area(ring: Ring) -> float:
    return abs(signed_area(ring.points))


def polygon_area(polygon: Polygon) -> float:
    return ring_area(polygon.exterior) - sum(ring_area(h) for h in polygon.holes)


def winding(points: Sequence[Point2]) -> str:
    return "CCW" if signed_area(points) > 0.0 else "CW"
