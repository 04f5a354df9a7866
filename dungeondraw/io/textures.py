from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional

import matplotlib.image as mpimg
import numpy as np

from dungeondraw.errors import TextureLoadError
from dungeondraw.render.state import Texture


logger = logging.getLogger(__name__)


def read_texture(path: Path, ref: Optional[str] = None) -> Texture:
    p = Path(path)
    try:
        pixels = np.asarray(mpimg.imread(str(p)))
    except (OSError, ValueError, SyntaxError) as exc:
        raise TextureLoadError(f"Cannot read texture {p}: {exc}") from exc
    if pixels.ndim < 2:
        raise TextureLoadError(f"Texture {p} is not an image")
    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    return Texture(ref=ref or str(p), width=width, height=height, pixels=pixels)


class FileTextureLoader:
    """Resolves texture refs against a root directory; decoded textures are cached per ref."""

    def __init__(self, root: Path | str = ".") -> None:
        self.root = Path(root).expanduser()
        self._cache: Dict[str, Texture] = {}

    def resolve(self, ref: str) -> Path:
        p = Path(ref).expanduser()
        return p if p.is_absolute() else self.root / p

    async def __call__(self, ref: str) -> Optional[Texture]:
        if ref in self._cache:
            return self._cache[ref]
        path = self.resolve(ref)
        if not path.is_file():
            logger.warning("Texture file not found: %s", path)
            return None
        texture = await asyncio.to_thread(read_texture, path, ref)
        self._cache[ref] = texture
        return texture
