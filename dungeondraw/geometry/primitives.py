from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from dungeondraw.geometry.tolerance import EPS_WELD


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class Ring:
    """Closed vertex loop. Stored order is kept as given; it drives the shadow walk."""

    points: Tuple[Point2, ...]

    def __post_init__(self) -> None:
        pts = tuple((float(x), float(y)) for x, y in self.points)
        if len(pts) < 3:
            raise ValueError("Ring requires at least 3 points")
        object.__setattr__(self, "points", pts)

    def is_closed(self) -> bool:
        a, b = self.points[0], self.points[-1]
        return abs(a[0] - b[0]) <= EPS_WELD and abs(a[1] - b[1]) <= EPS_WELD

    def coords(self) -> List[Point2]:
        pts = list(self.points)
        if not self.is_closed():
            pts.append(pts[0])
        return pts

    def edges(self) -> Iterator[Tuple[Point2, Point2]]:
        pts = self.coords()
        for i in range(len(pts) - 1):
            yield pts[i], pts[i + 1]


@dataclass(frozen=True)
class Polygon:
    exterior: Ring
    holes: Tuple[Ring, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "holes", tuple(self.holes))

    @classmethod
    def from_points(cls, exterior, holes=()) -> "Polygon":
        return cls(exterior=Ring(tuple(exterior)), holes=tuple(Ring(tuple(h)) for h in holes))

    def rings(self) -> List[Ring]:
        return [self.exterior, *self.holes]


@dataclass(frozen=True)
class MultiPolygon:
    polygons: Tuple[Polygon, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def __len__(self) -> int:
        return len(self.polygons)


Geometry = Optional[Union[Polygon, MultiPolygon]]


def member_polygons(geometry: Geometry) -> List[Polygon]:
    match geometry:
        case Polygon():
            return [geometry]
        case MultiPolygon(polygons=polygons):
            return list(polygons)
        case _:
            return []


@dataclass(frozen=True)
class Segment:
    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_sequence(cls, values) -> "Segment":
        x1, y1, x2, y2 = (float(v) for v in values)
        return cls(x1, y1, x2, y2)

    @property
    def start(self) -> Point2:
        return (self.x1, self.y1)

    @property
    def end(self) -> Point2:
        return (self.x2, self.y2)

    def reversed(self) -> "Segment":
        return type(self)(self.x2, self.y2, self.x1, self.y1)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)


class WallSegment(Segment):
    pass


class DoorSegment(Segment):
    pass
