from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, Union

from dungeondraw.geometry.polygon2d import signed_area
from dungeondraw.geometry.primitives import Point2


Path2 = Tuple[Point2, ...]


@dataclass(frozen=True)
class FillStyle:
    color: int
    alpha: float = 1.0


@dataclass(frozen=True)
class LineStyle:
    width: float
    color: int
    alpha: float = 1.0
    # 0.5 strokes centered on the path, 1.0 strokes entirely on the outer side.
    alignment: float = 0.5
    join: Literal["miter", "round", "bevel"] = "miter"


@dataclass(frozen=True)
class FillPolygon:
    exterior: Path2
    holes: Tuple[Path2, ...] = ()
    fill: FillStyle = FillStyle(color=0xFFFFFF)

    @property
    def area(self) -> float:
        return abs(signed_area(self.exterior)) - sum(abs(signed_area(h)) for h in self.holes)


@dataclass(frozen=True)
class StrokePolygon:
    points: Path2
    line: LineStyle
    fill: Optional[FillStyle] = None


@dataclass(frozen=True)
class StrokePath:
    """Disjoint stroked sub-paths sharing one line style."""

    subpaths: Tuple[Path2, ...]
    line: LineStyle

    @property
    def segment_count(self) -> int:
        return sum(max(len(p) - 1, 0) for p in self.subpaths)


@dataclass(frozen=True)
class TileSprite:
    x: float
    y: float
    size: float
    texture_ref: str
    tint: Optional[int] = None


Primitive = Union[FillPolygon, StrokePolygon, StrokePath, TileSprite]


@dataclass
class LayerDraws:
    floor: List[Primitive] = field(default_factory=list)
    shadow: List[Primitive] = field(default_factory=list)
    wall: List[Primitive] = field(default_factory=list)

    def extend(self, other: "LayerDraws") -> "LayerDraws":
        self.floor.extend(other.floor)
        self.shadow.extend(other.shadow)
        self.wall.extend(other.wall)
        return self


def as_path(points) -> Path2:
    return tuple((float(x), float(y)) for x, y in points)
