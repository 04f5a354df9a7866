from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from dungeondraw.errors import DegenerateDoorError
from dungeondraw.geometry.kernel import distance, slope
from dungeondraw.geometry.primitives import Point2, Segment
from dungeondraw.geometry.tolerance import EPS_POS


JAMB_LENGTH = 20.0

Corners = Tuple[Point2, Point2, Point2, Point2]


@dataclass(frozen=True)
class DoorGeometry:
    start: Point2
    jamb1_end: Point2
    rect_end: Point2
    end: Point2
    # lower-right, upper-right, upper-left, lower-left; None when the door is too short for a panel
    panel: Optional[Corners] = None

    @property
    def jambs(self) -> Tuple[Tuple[Point2, Point2], Tuple[Point2, Point2]]:
        return (self.start, self.jamb1_end), (self.rect_end, self.end)


def rectangle_for_segment(x1: float, y1: float, x2: float, y2: float, door_thickness: float) -> Corners:
    """Rectangle around a segment, half the door thickness either side of it."""
    m = slope(x1, y1, x2, y2)
    d = float(door_thickness) / 2.0

    if m == 0:
        return ((x1, y1 + d), (x2, y1 + d), (x2, y1 - d), (x1, y1 - d))
    if m == math.inf:
        return ((x1 - d, y1), (x1 - d, y2), (x2 + d, y2), (x2 + d, y1))

    theta = math.atan(m)
    # Perpendicular to (cos, sin) is (-sin, cos).
    dy = d * math.cos(theta)
    dx = d * math.sin(theta)
    return (
        (x1 - dx, y1 + dy),
        (x2 - dx, y2 + dy),
        (x2 + dx, y2 - dy),
        (x1 + dx, y1 - dy),
    )


def build_door_geometry(door: Segment, door_thickness: float, jamb_length: float = JAMB_LENGTH) -> DoorGeometry:
    x1, y1, x2, y2 = door.as_tuple()
    total = distance(x1, y1, x2, y2)
    if total <= EPS_POS:
        raise DegenerateDoorError(f"zero-length door at ({x1}, {y1})")

    jamb = min(float(jamb_length), total / 2.0)
    rect_length = total - 2.0 * jamb
    jamb_fraction = jamb / total
    rect_end_fraction = jamb_fraction + rect_length / total

    dx, dy = x2 - x1, y2 - y1
    jamb1_end = (x1 + dx * jamb_fraction, y1 + dy * jamb_fraction)
    rect_end = (x1 + dx * rect_end_fraction, y1 + dy * rect_end_fraction)

    panel = None
    if rect_length > EPS_POS:
        panel = rectangle_for_segment(jamb1_end[0], jamb1_end[1], rect_end[0], rect_end[1], door_thickness)
    return DoorGeometry(start=(x1, y1), jamb1_end=jamb1_end, rect_end=rect_end, end=(x2, y2), panel=panel)
