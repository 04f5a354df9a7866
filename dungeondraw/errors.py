from __future__ import annotations


class DungeonDrawError(Exception):
    pass


class GeometryError(DungeonDrawError, ValueError):
    pass


class DegenerateGeometryError(GeometryError):
    pass


class DegenerateDoorError(DegenerateGeometryError):
    pass


class RenderError(DungeonDrawError):
    pass


class StateLoadError(DungeonDrawError, ValueError):
    pass


class TextureLoadError(DungeonDrawError):
    pass
