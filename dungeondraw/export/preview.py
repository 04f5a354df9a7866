from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import matplotlib
matplotlib.use("Agg")  # headless-safe for servers/CI
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.lines import Line2D  # noqa: E402
from matplotlib.patches import PathPatch, Rectangle  # noqa: E402
from matplotlib.path import Path as MplPath  # noqa: E402
from scipy.ndimage import gaussian_filter  # noqa: E402

from dungeondraw.render.display import BlurFilter, DisplayNode  # noqa: E402
from dungeondraw.render.primitives import (  # noqa: E402
    FillPolygon,
    LineStyle,
    Path2,
    StrokePath,
    StrokePolygon,
    TileSprite,
)
from dungeondraw.render.state import SceneBounds, Texture  # noqa: E402


logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]


def hex_to_rgb(color: int) -> RGB:
    return (((color >> 16) & 0xFF) / 255.0, ((color >> 8) & 0xFF) / 255.0, (color & 0xFF) / 255.0)


class GaussianBlur:
    """agg_filter callable blurring an artist by ``sigma_px`` points."""

    def __init__(self, sigma_px: float) -> None:
        self.sigma_px = max(float(sigma_px), 0.5)

    def __call__(self, image: np.ndarray, dpi: float):
        sigma = self.sigma_px * dpi / 72.0
        pad = int(np.ceil(3.0 * sigma))
        img = np.pad(image, ((pad, pad), (pad, pad), (0, 0)), mode="constant")
        return gaussian_filter(img, sigma=(sigma, sigma, 0)), -pad, -pad


def _compound_path(exterior: Path2, holes: Sequence[Path2] = ()) -> MplPath:
    verts: List[Tuple[float, float]] = []
    codes: List[int] = []
    for ring in (exterior, *holes):
        pts = list(ring)
        if len(pts) >= 2 and pts[0] == pts[-1]:
            pts.pop()
        if len(pts) < 3:
            continue
        verts.extend(pts)
        verts.append(pts[0])
        codes.append(MplPath.MOVETO)
        codes.extend([MplPath.LINETO] * (len(pts) - 1))
        codes.append(MplPath.CLOSEPOLY)
    return MplPath(verts, codes)


def _mask_patch(mask: DisplayNode, ax) -> Optional[PathPatch]:
    paths = [_compound_path(p.exterior, p.holes) for p in mask.primitives_of(FillPolygon)]
    if not paths:
        return None
    patch = PathPatch(MplPath.make_compound_path(*paths), transform=ax.transData, facecolor="none", edgecolor="none")
    return patch


class _Painter:
    def __init__(self, ax, points_per_unit: float, textures: Mapping[str, Texture]) -> None:
        self.ax = ax
        self.points_per_unit = points_per_unit
        self.textures = textures

    def linewidth(self, style: LineStyle) -> float:
        return max(float(style.width) * self.points_per_unit, 0.1)

    def artists_for(self, primitive) -> List:
        ax = self.ax
        if isinstance(primitive, FillPolygon):
            return [
                PathPatch(
                    _compound_path(primitive.exterior, primitive.holes),
                    facecolor=hex_to_rgb(primitive.fill.color),
                    alpha=primitive.fill.alpha,
                    edgecolor="none",
                )
            ]
        if isinstance(primitive, StrokePolygon):
            out = []
            if primitive.fill is not None:
                out.append(
                    PathPatch(
                        _compound_path(primitive.points),
                        facecolor=hex_to_rgb(primitive.fill.color),
                        alpha=primitive.fill.alpha,
                        edgecolor="none",
                    )
                )
            out.append(
                PathPatch(
                    _compound_path(primitive.points),
                    facecolor="none",
                    edgecolor=hex_to_rgb(primitive.line.color),
                    alpha=primitive.line.alpha,
                    linewidth=self.linewidth(primitive.line),
                    joinstyle=primitive.line.join,
                )
            )
            return out
        if isinstance(primitive, StrokePath):
            return [
                Line2D(
                    [p[0] for p in sub],
                    [p[1] for p in sub],
                    color=hex_to_rgb(primitive.line.color),
                    alpha=primitive.line.alpha,
                    linewidth=self.linewidth(primitive.line),
                    solid_joinstyle=primitive.line.join,
                    solid_capstyle="butt",
                )
                for sub in primitive.subpaths
            ]
        if isinstance(primitive, TileSprite):
            return self._tile(primitive)
        logger.debug("No preview painter for %s", type(primitive).__name__)
        return []

    def _tile(self, tile: TileSprite) -> List:
        texture = self.textures.get(tile.texture_ref)
        extent = (tile.x, tile.x + tile.size, tile.y + tile.size, tile.y)
        if texture is None or texture.pixels is None:
            return [Rectangle((tile.x, tile.y), tile.size, tile.size, facecolor="#d9d2c3", edgecolor="none")]
        pixels = np.asarray(texture.pixels, dtype=float)
        if pixels.max() > 1.0:
            pixels = pixels / 255.0
        if tile.tint is not None and pixels.ndim == 3:
            pixels = pixels.copy()
            pixels[..., :3] *= np.asarray(hex_to_rgb(tile.tint))
        image = self.ax.imshow(pixels, extent=extent, interpolation="bilinear")
        return [image]


def _mask_nodes(root: DisplayNode) -> Set[int]:
    return {id(n.mask) for n in root.walk() if n.mask is not None}


def _paint(node: DisplayNode, painter: _Painter, skip: Set[int]) -> None:
    if id(node) in skip:
        return
    clip = _mask_patch(node.mask, painter.ax) if node.mask is not None else None
    blur = next((f for f in node.filters if isinstance(f, BlurFilter)), None)
    for primitive in node.primitives:
        for artist in painter.artists_for(primitive):
            if artist.axes is None:
                painter.ax.add_artist(artist)
            if clip is not None:
                artist.set_clip_path(clip)
            if blur is not None:
                artist.set_agg_filter(GaussianBlur(blur.strength))
                artist.set_rasterized(True)
    for child in node.children:
        _paint(child, painter, skip)


def save_preview(
    root: DisplayNode,
    out_path: Path,
    bounds: SceneBounds,
    *,
    textures: Optional[Mapping[str, Texture]] = None,
    background: str = "#ffffff",
    width_in: float = 8.0,
    dpi: int = 150,
) -> Path:
    """Rasterize a rendered display tree to PNG (scene y axis points down)."""
    out_path = Path(out_path).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    w, h = bounds.padded_width, bounds.padded_height
    if w <= 0.0 or h <= 0.0:
        raise ValueError(f"Preview bounds must be positive, got {w}x{h}")
    height_in = width_in * h / w
    fig = plt.figure(figsize=(width_in, height_in), facecolor=background)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_xlim(0.0, w)
    ax.set_ylim(h, 0.0)
    ax.set_aspect("equal")
    ax.axis("off")

    painter = _Painter(ax, points_per_unit=width_in * 72.0 / w, textures=textures or {})
    _paint(root, painter, _mask_nodes(root))
    # imshow resets the view; pin it back to the scene.
    ax.set_xlim(0.0, w)
    ax.set_ylim(h, 0.0)

    fig.savefig(out_path, dpi=dpi, facecolor=background)
    plt.close(fig)
    return out_path


def texture_index(textures: Iterable[Texture]) -> Mapping[str, Texture]:
    return {t.ref: t for t in textures}
