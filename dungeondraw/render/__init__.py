"""
Floor-plan rendering: turns a RenderState into floor, interior-shadow and wall
layers of immutable drawing primitives.
"""

from dungeondraw.render.composer import render, render_sync
from dungeondraw.render.config import DEFAULT_CONFIG, RenderConfig
from dungeondraw.render.display import BlurFilter, Container, DisplayNode
from dungeondraw.render.state import RenderState, SceneBounds, Texture

__all__ = [
    "render",
    "render_sync",
    "DEFAULT_CONFIG",
    "RenderConfig",
    "BlurFilter",
    "Container",
    "DisplayNode",
    "RenderState",
    "SceneBounds",
    "Texture",
]
