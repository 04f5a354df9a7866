from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from dungeondraw.errors import StateLoadError, TextureLoadError
from dungeondraw.export.preview import save_preview, texture_index
from dungeondraw.geometry.kernel import geometry_extent
from dungeondraw.geometry.primitives import DoorSegment, Polygon, WallSegment
from dungeondraw.io.state_io import StateSnapshot, load_snapshot, save_snapshot
from dungeondraw.io.textures import FileTextureLoader
from dungeondraw.render.composer import render
from dungeondraw.render.config import RenderConfig
from dungeondraw.render.display import DisplayNode
from dungeondraw.render.state import RenderState, SceneBounds


logger = logging.getLogger("dungeondraw")


def demo_snapshot() -> StateSnapshot:
    room = Polygon.from_points(
        [(100.0, 100.0), (500.0, 100.0), (500.0, 400.0), (300.0, 400.0), (300.0, 600.0), (100.0, 600.0)],
        holes=[[(180.0, 180.0), (180.0, 260.0), (260.0, 260.0), (260.0, 180.0)]],
    )
    state = RenderState(
        geometry=room,
        interior_walls=(WallSegment(300.0, 100.0, 300.0, 250.0), WallSegment(100.0, 400.0, 200.0, 300.0)),
        doors=(DoorSegment(300.0, 250.0, 300.0, 400.0), DoorSegment(350.0, 400.0, 450.0, 400.0)),
        config=RenderConfig(),
    )
    return StateSnapshot(state=state, scene=SceneBounds(width=600.0, height=700.0, padding=0.0))


def _cmd_demo(args: argparse.Namespace) -> int:
    outpath = save_snapshot(demo_snapshot(), Path(args.out))
    print(f"Saved demo render state to: {outpath}")
    return 0


def _scene_for(args: argparse.Namespace, snapshot: StateSnapshot) -> SceneBounds:
    scene = snapshot.scene
    if args.width is not None and args.height is not None:
        scene = SceneBounds(width=args.width, height=args.height, padding=args.padding or 0.0)
    if scene is None:
        extent = geometry_extent(snapshot.state.geometry)
        if extent is None:
            raise StateLoadError("No scene bounds given and no geometry to derive them from")
        scene = SceneBounds(width=extent[0], height=extent[1], padding=args.padding or 0.0)
    return scene


def _cmd_render(args: argparse.Namespace) -> int:
    state_path = Path(args.file).expanduser().resolve()
    if not state_path.is_file():
        print(f"[ERROR] File not found: {state_path}")
        return 2
    try:
        snapshot = load_snapshot(state_path)
        scene = _scene_for(args, snapshot)
    except StateLoadError as exc:
        print(f"[ERROR] {exc}")
        return 3

    loader = FileTextureLoader(args.texture_root or state_path.parent)
    root = DisplayNode(name="scene")
    asyncio.run(render(root, snapshot.state, load_texture=loader, scene_bounds=scene))
    logger.debug("Rendered %s into %d layers", state_path, len(root.children))

    textures = []
    ref = snapshot.state.config.floor_texture
    if ref:
        try:
            texture = asyncio.run(loader(ref))
        except TextureLoadError as exc:
            logger.warning("Preview drawn without floor texture: %s", exc)
            texture = None
        if texture is not None:
            textures.append(texture)

    outpath = save_preview(root, Path(args.out), scene, textures=texture_index(textures), dpi=args.dpi)
    print("dungeondraw render")
    print(f"  State: {state_path}")
    print(f"  Saved: {outpath}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="dungeondraw")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a small demo render state (JSON).")
    demo.add_argument("--out", default="out/demo_state.json", help="Output JSON path")
    demo.set_defaults(func=_cmd_demo)

    r = sub.add_parser("render", help="Render a state JSON snapshot to a PNG preview.")
    r.add_argument("file", help="Path to render state JSON")
    r.add_argument("--out", default="out/floorplan.png", help="Output PNG path")
    r.add_argument("--width", type=float, default=None, help="Scene width (overrides snapshot)")
    r.add_argument("--height", type=float, default=None, help="Scene height (overrides snapshot)")
    r.add_argument("--padding", type=float, default=None, help="Scene padding fraction")
    r.add_argument("--texture-root", default=None, help="Directory that texture refs resolve against")
    r.add_argument("--dpi", type=int, default=100, help="Preview resolution")
    r.set_defaults(func=_cmd_render)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
