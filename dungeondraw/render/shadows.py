"""
Directional drop-shadow policy for a fixed light in the upper-left.

The boundary test looks only at coordinate signs of the walked edge, so it
depends on the ring's vertex order and is known to misjudge the first edge of
some walks. Renderers use it as-is; ``winding_needs_shadow`` is the
winding-aware alternative and is not wired into rendering.
"""
from __future__ import annotations

from typing import Sequence, Tuple

from dungeondraw.geometry.kernel import slope
from dungeondraw.geometry.polygon2d import signed_area
from dungeondraw.geometry.primitives import Point2, Segment


# Screen coordinates (y down): light arrives from the upper-left.
LIGHT_DIRECTION: Tuple[float, float] = (1.0, 1.0)


def needs_shadow(x1: float, y1: float, x2: float, y2: float) -> bool:
    if x1 == x2:
        # north to south
        return y2 > y1
    if y1 == y2:
        # east to west
        return x1 > x2
    return slope(x1, y1, x2, y2) < 0 and y2 > y1


def door_needs_shadow(x1: float, y1: float, x2: float, y2: float) -> bool:
    if x1 == x2 or y1 == y2:
        return True
    return slope(x1, y1, x2, y2) < 0 and y2 > y1


def canonicalize(segment: Segment) -> Segment:
    if segment.x2 < segment.x1:
        return segment.reversed()
    if segment.x2 == segment.x1 and segment.y2 >= segment.y1:
        return segment.reversed()
    return segment


def segment_needs_shadow(segment: Segment) -> bool:
    """Standalone wall/door test: canonical segment, walked from its second point back to its first."""
    c = canonicalize(segment)
    return door_needs_shadow(c.x2, c.y2, c.x1, c.y1)


def winding_needs_shadow(
    a: Point2,
    b: Point2,
    ring: Sequence[Point2],
    light: Tuple[float, float] = LIGHT_DIRECTION,
) -> bool:
    """
    Winding-aware variant: the edge casts an interior shadow when its inward
    normal points along the light direction.
    """
    dx, dy = b[0] - a[0], b[1] - a[1]
    # Left normal is inward for a positive-area ring.
    nx, ny = -dy, dx
    if signed_area(ring) < 0.0:
        nx, ny = -nx, -ny
    return nx * light[0] + ny * light[1] > 0.0
