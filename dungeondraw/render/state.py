from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from dungeondraw.geometry.primitives import DoorSegment, Geometry, WallSegment
from dungeondraw.render.config import DEFAULT_CONFIG, RenderConfig


@dataclass(frozen=True)
class SceneBounds:
    width: float
    height: float
    padding: float = 0.0

    @property
    def padded_width(self) -> float:
        return float(self.width) * (1.0 + 2.0 * float(self.padding))

    @property
    def padded_height(self) -> float:
        return float(self.height) * (1.0 + 2.0 * float(self.padding))


@dataclass(frozen=True)
class Texture:
    ref: str
    width: int
    height: int
    # RGBA pixel array when the loader decoded the image; None for size-only handles.
    pixels: Optional[object] = field(default=None, compare=False, repr=False)

    @property
    def valid(self) -> bool:
        return int(self.width) > 0 and int(self.height) > 0


@dataclass(frozen=True)
class RenderState:
    geometry: Geometry = None
    interior_walls: Tuple[WallSegment, ...] = ()
    doors: Tuple[DoorSegment, ...] = ()
    config: RenderConfig = DEFAULT_CONFIG

    def __post_init__(self) -> None:
        object.__setattr__(self, "interior_walls", tuple(self.interior_walls))
        object.__setattr__(self, "doors", tuple(self.doors))
