from __future__ import annotations

import logging
from typing import List

from dungeondraw.errors import GeometryError
from dungeondraw.geometry.kernel import buffer_outward
from dungeondraw.geometry.primitives import Geometry, member_polygons
from dungeondraw.render.config import RenderConfig, enabled
from dungeondraw.render.display import EXTERIOR_SHADOW, BlurFilter, Container, DisplayNode
from dungeondraw.render.primitives import FillPolygon, FillStyle, as_path


logger = logging.getLogger(__name__)


def add_exterior_shadow(container: Container, config: RenderConfig, geometry: Geometry) -> List[DisplayNode]:
    """Blurred, grown silhouette under each room."""
    if not enabled(config.exterior_shadow_thickness) or not enabled(config.exterior_shadow_opacity) or not geometry:
        return []

    fill = FillStyle(color=config.color("exterior_shadow_color"), alpha=float(config.exterior_shadow_opacity))
    nodes: List[DisplayNode] = []
    for polygon in member_polygons(geometry):
        try:
            expanded = buffer_outward(polygon, float(config.exterior_shadow_thickness))
        except GeometryError as exc:
            logger.warning("Skipping exterior shadow for one polygon: %s", exc)
            continue
        shape = FillPolygon(
            exterior=as_path(expanded.exterior.coords()),
            holes=tuple(as_path(h.coords()) for h in expanded.holes),
            fill=fill,
        )
        nodes.append(container.add_child(DisplayNode(name=EXTERIOR_SHADOW, primitives=[shape], filters=[BlurFilter()])))
    return nodes
