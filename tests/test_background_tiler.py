from __future__ import annotations

import asyncio

from dungeondraw.geometry.primitives import MultiPolygon, Polygon
from dungeondraw.render.background import add_tiled_background, tile_grid
from dungeondraw.render.config import RenderConfig, string_to_hex
from dungeondraw.render.display import BACKGROUND, DisplayNode
from dungeondraw.render.state import SceneBounds, Texture


SQUARE = Polygon.from_points([(0, 0), (100, 0), (100, 100), (0, 100)])


def test_only_overlapping_cells_get_tiles() -> None:
    tiles = tile_grid(SQUARE, SceneBounds(width=200, height=200), texture_size=50, texture_ref="stone")
    assert sorted((t.x, t.y) for t in tiles) == [(0.0, 0.0), (0.0, 50.0), (50.0, 0.0), (50.0, 50.0)]
    assert all(t.size == 50.0 and t.texture_ref == "stone" for t in tiles)


def test_cells_adjacent_to_the_room_get_no_tile() -> None:
    tiles = tile_grid(SQUARE, SceneBounds(width=200, height=200), texture_size=100)
    assert [(t.x, t.y) for t in tiles] == [(0.0, 0.0)]


def test_padding_extends_the_grid() -> None:
    room = Polygon.from_points([(150, 150), (190, 150), (190, 190), (150, 190)])
    assert tile_grid(room, SceneBounds(width=100, height=100, padding=0.0), texture_size=50) == []
    padded = tile_grid(room, SceneBounds(width=100, height=100, padding=0.5), texture_size=50)
    assert [(t.x, t.y) for t in padded] == [(150.0, 150.0)]


def test_multipolygon_tiles_every_member() -> None:
    other = Polygon.from_points([(300, 300), (350, 300), (350, 350), (300, 350)])
    tiles = tile_grid(MultiPolygon((SQUARE, other)), SceneBounds(width=400, height=400), texture_size=50)
    assert len(tiles) == 5


def test_invalid_texture_size_gives_no_tiles() -> None:
    assert tile_grid(SQUARE, SceneBounds(width=200, height=200), texture_size=0) == []


def _loader(texture):
    async def load(ref: str):
        return texture

    return load


def test_add_tiled_background_masks_and_tints() -> None:
    container = DisplayNode(name="scene")
    mask = DisplayNode(name="mask")
    config = RenderConfig(floor_texture="stone.png", floor_texture_tint="#808080")
    bg = asyncio.run(
        add_tiled_background(
            container,
            mask,
            config,
            SQUARE,
            load_texture=_loader(Texture(ref="stone.png", width=50, height=50)),
            scene_bounds=SceneBounds(width=200, height=200),
        )
    )
    assert bg is not None
    assert container.children == [bg]
    assert bg.name == BACKGROUND
    assert bg.mask is mask
    assert len(bg.primitives) == 4
    assert {t.tint for t in bg.primitives} == {string_to_hex("#808080")}


def test_invalid_texture_skips_background() -> None:
    container = DisplayNode(name="scene")
    result = asyncio.run(
        add_tiled_background(
            container,
            DisplayNode(name="mask"),
            RenderConfig(floor_texture="missing.png"),
            SQUARE,
            load_texture=_loader(Texture(ref="missing.png", width=0, height=0)),
            scene_bounds=SceneBounds(width=200, height=200),
        )
    )
    assert result is None
    assert container.children == []


def test_failing_loader_skips_background() -> None:
    async def broken(ref: str):
        raise OSError("disk on fire")

    container = DisplayNode(name="scene")
    result = asyncio.run(
        add_tiled_background(
            container,
            DisplayNode(name="mask"),
            RenderConfig(floor_texture="stone.png"),
            SQUARE,
            load_texture=broken,
            scene_bounds=SceneBounds(width=200, height=200),
        )
    )
    assert result is None
    assert container.children == []


def test_non_finite_bounds_place_no_tiles() -> None:
    bounds = SceneBounds(width=float("nan"), height=200)
    assert tile_grid(SQUARE, bounds, texture_size=50) == []
