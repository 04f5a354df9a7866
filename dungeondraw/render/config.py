from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional


def string_to_hex(color: str) -> int:
    """'#rrggbb' (or 'rrggbb' / '0xrrggbb') to an integer colour."""
    s = str(color).strip().lower()
    if s.startswith("#"):
        s = s[1:]
    elif s.startswith("0x"):
        s = s[2:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"Unsupported colour string: {color!r}")
    return int(s, 16)


def enabled(value: Optional[float]) -> bool:
    """Optional numeric settings are on only when present and non-zero."""
    return bool(value)


@dataclass(frozen=True)
class RenderConfig:
    wall_thickness: float = 8.0
    wall_color: str = "#000000"
    floor_color: str = "#F2EDDF"
    door_color: str = "#000000"
    door_fill_color: Optional[str] = "#FFFFFF"
    door_fill_opacity: Optional[float] = 1.0
    door_thickness: float = 25.0
    interior_shadow_color: str = "#000000"
    interior_shadow_opacity: Optional[float] = 0.5
    interior_shadow_thickness: float = 8.0
    exterior_shadow_color: str = "#000000"
    exterior_shadow_opacity: Optional[float] = 0.5
    exterior_shadow_thickness: Optional[float] = 20.0
    floor_texture: Optional[str] = None
    floor_texture_tint: Optional[str] = None

    @property
    def wall_width(self) -> float:
        return float(self.wall_thickness or 0.0)

    @property
    def door_width(self) -> float:
        return float(self.door_thickness or 0.0)

    @property
    def shadow_stroke_width(self) -> float:
        return self.wall_width / 2.0 + float(self.interior_shadow_thickness or 0.0)

    def color(self, name: str) -> int:
        """Hex value of a colour setting; an unset colour falls back to the default."""
        return string_to_hex(getattr(self, name) or getattr(DEFAULT_CONFIG, name))

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RenderConfig":
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in d.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                continue
            if value is None and name in _REQUIRED:
                continue
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Key names used by the host's stored scene flags.
_CAMEL_KEYS = {
    "wallThickness": "wall_thickness",
    "wallColor": "wall_color",
    "floorColor": "floor_color",
    "doorColor": "door_color",
    "doorFillColor": "door_fill_color",
    "doorFillOpacity": "door_fill_opacity",
    "doorThickness": "door_thickness",
    "interiorShadowColor": "interior_shadow_color",
    "interiorShadowOpacity": "interior_shadow_opacity",
    "interiorShadowThickness": "interior_shadow_thickness",
    "exteriorShadowColor": "exterior_shadow_color",
    "exteriorShadowOpacity": "exterior_shadow_opacity",
    "exteriorShadowThickness": "exterior_shadow_thickness",
    "floorTexture": "floor_texture",
    "floorTextureTint": "floor_texture_tint",
}

# Styling fields with no "off" state; a null keeps the default.
_REQUIRED = frozenset(
    {
        "wall_thickness",
        "wall_color",
        "floor_color",
        "door_color",
        "door_thickness",
        "interior_shadow_color",
        "interior_shadow_thickness",
        "exterior_shadow_color",
    }
)


DEFAULT_CONFIG = RenderConfig()
