"""
Floor-plan geometry: rings, polygons with holes, and the shapely-backed kernel.
"""

from dungeondraw.geometry.primitives import (
    Point2,
    Ring,
    Polygon,
    MultiPolygon,
    Geometry,
    Segment,
    WallSegment,
    DoorSegment,
    member_polygons,
)

__all__ = [
    "Point2",
    "Ring",
    "Polygon",
    "MultiPolygon",
    "Geometry",
    "Segment",
    "WallSegment",
    "DoorSegment",
    "member_polygons",
]
