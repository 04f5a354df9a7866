from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Union

from dungeondraw.errors import RenderError
from dungeondraw.geometry.kernel import geometry_extent
from dungeondraw.geometry.primitives import Geometry, MultiPolygon, Polygon
from dungeondraw.render.background import TextureLoader, add_tiled_background
from dungeondraw.render.display import (
    FLOOR,
    FLOOR_MASK,
    INTERIOR_SHADOW,
    WALLS,
    BlurFilter,
    Container,
    DisplayNode,
)
from dungeondraw.render.exterior import add_exterior_shadow
from dungeondraw.render.linear import draw_linear_features
from dungeondraw.render.primitives import LayerDraws
from dungeondraw.render.rooms import draw_geometry_mask, draw_geometry_room
from dungeondraw.render.state import RenderState, SceneBounds


logger = logging.getLogger(__name__)

BoundsSource = Union[SceneBounds, Callable[[], SceneBounds]]


def _supported(geometry: Geometry) -> bool:
    match geometry:
        case Polygon() | MultiPolygon():
            return True
        case _:
            return False


def _resolve_bounds(source: Optional[BoundsSource], geometry: Geometry) -> Optional[SceneBounds]:
    if isinstance(source, SceneBounds):
        return source
    if source is not None:
        return source()
    extent = geometry_extent(geometry)
    if extent is None:
        return None
    return SceneBounds(width=extent[0], height=extent[1], padding=0.0)


async def render(
    container: Container,
    state: RenderState,
    *,
    load_texture: Optional[TextureLoader] = None,
    scene_bounds: Optional[BoundsSource] = None,
) -> Container:
    """
    Rebuild ``container`` from ``state``. Children end up in z-order: exterior
    shadows, floor mask, optional tiled background, then floor, interior shadow
    and wall layers. The texture load is the only await; callers re-rendering
    the same container must drop any in-flight render first.
    """
    if container is None:
        raise RenderError("render() needs a container")
    if state is None:
        raise RenderError("render() needs a render state")

    container.clear()
    config = state.config
    draws = LayerDraws()
    shadow_layer = DisplayNode(name=INTERIOR_SHADOW)

    geometry = state.geometry
    if geometry is not None and not _supported(geometry):
        logger.warning("Unsupported geometry %s; drawing walls and doors only", type(geometry).__name__)
        geometry = None

    if geometry is not None:
        add_exterior_shadow(container, config, geometry)

        clip_mask = DisplayNode(name=FLOOR_MASK, primitives=list(draw_geometry_mask(geometry)))
        container.add_child(clip_mask)

        shadow_layer.mask = clip_mask
        shadow_layer.filters.append(BlurFilter())

        if config.floor_texture:
            bounds = _resolve_bounds(scene_bounds, geometry)
            if load_texture is None:
                logger.warning("Floor texture %r configured without a texture loader", config.floor_texture)
            elif bounds is None:
                logger.warning("No scene bounds for an empty floor; skipping background")
            else:
                await add_tiled_background(
                    container,
                    clip_mask,
                    config,
                    geometry,
                    load_texture=load_texture,
                    scene_bounds=bounds,
                )

        draws.extend(draw_geometry_room(config, geometry))

    draws.extend(draw_linear_features(config, state.interior_walls, state.doors))

    shadow_layer.extend(draws.shadow)
    container.add_child(DisplayNode(name=FLOOR, primitives=draws.floor))
    container.add_child(shadow_layer)
    container.add_child(DisplayNode(name=WALLS, primitives=draws.wall))
    return container


def render_sync(
    container: Container,
    state: RenderState,
    *,
    load_texture: Optional[TextureLoader] = None,
    scene_bounds: Optional[BoundsSource] = None,
) -> Container:
    return asyncio.run(render(container, state, load_texture=load_texture, scene_bounds=scene_bounds))
