from __future__ import annotations

import logging
import math
from typing import Awaitable, Callable, List, Optional

from dungeondraw.geometry.kernel import cell_intersects_geometry, to_shapely
from dungeondraw.geometry.primitives import Geometry
from dungeondraw.render.config import RenderConfig, string_to_hex
from dungeondraw.render.display import BACKGROUND, Container, DisplayNode
from dungeondraw.render.primitives import TileSprite
from dungeondraw.render.state import SceneBounds, Texture


logger = logging.getLogger(__name__)

TextureLoader = Callable[[str], Awaitable[Optional[Texture]]]


def tile_grid(
    geometry: Geometry,
    bounds: SceneBounds,
    texture_size: float,
    texture_ref: str = "",
    tint: Optional[int] = None,
) -> List[TileSprite]:
    """One sprite per grid cell that overlaps the floor; cells only touching it are left empty."""
    size = float(texture_size)
    if size <= 0.0:
        return []
    if not (math.isfinite(bounds.padded_width) and math.isfinite(bounds.padded_height)):
        logger.warning("Scene bounds are not finite; no tiles placed")
        return []
    rows = math.ceil(bounds.padded_height / size)
    cols = math.ceil(bounds.padded_width / size)

    shape = to_shapely(geometry)
    tiles: List[TileSprite] = []
    for row in range(rows):
        for col in range(cols):
            x0, y0 = col * size, row * size
            if cell_intersects_geometry(shape, (x0, y0, x0 + size, y0 + size)):
                tiles.append(TileSprite(x=x0, y=y0, size=size, texture_ref=texture_ref, tint=tint))
    return tiles


async def add_tiled_background(
    container: Container,
    mask: DisplayNode,
    config: RenderConfig,
    geometry: Geometry,
    *,
    load_texture: TextureLoader,
    scene_bounds: SceneBounds,
) -> Optional[DisplayNode]:
    ref = str(config.floor_texture)
    try:
        texture = await load_texture(ref)
    except Exception as exc:
        logger.warning("Floor texture %r failed to load: %s", ref, exc)
        return None
    if texture is None or not texture.valid:
        logger.warning("Floor texture %r is missing or invalid; skipping background", ref)
        return None

    tint = string_to_hex(config.floor_texture_tint) if config.floor_texture_tint else None
    # Textures are assumed square.
    tiles = tile_grid(geometry, scene_bounds, texture.width, texture_ref=ref, tint=tint)
    logger.debug("Placed %d floor tiles of size %d", len(tiles), texture.width)

    bg = DisplayNode(name=BACKGROUND, primitives=list(tiles), mask=mask)
    container.add_child(bg)
    return bg
