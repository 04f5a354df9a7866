from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from shapely.geometry import mapping, shape

from dungeondraw.errors import GeometryError, StateLoadError
from dungeondraw.geometry.kernel import from_shapely, to_shapely
from dungeondraw.geometry.primitives import DoorSegment, Geometry, WallSegment
from dungeondraw.render.config import RenderConfig
from dungeondraw.render.state import RenderState, SceneBounds


@dataclass(frozen=True)
class StateSnapshot:
    state: RenderState
    scene: Optional[SceneBounds] = None


def _geometry_from_dict(d: Optional[Mapping[str, Any]]) -> Geometry:
    if not d:
        return None
    try:
        return from_shapely(shape(d))
    except (GeometryError, KeyError, TypeError, ValueError, AttributeError) as exc:
        raise StateLoadError(f"Invalid geometry: {exc}") from exc


def _segments_from_list(items: Any, kind, label: str) -> List:
    out = []
    for i, item in enumerate(items or []):
        try:
            out.append(kind.from_sequence(item))
        except (TypeError, ValueError) as exc:
            raise StateLoadError(f"{label}[{i}] must be [x1, y1, x2, y2]: {item!r}") from exc
    return out


def _scene_from_dict(d: Optional[Mapping[str, Any]]) -> Optional[SceneBounds]:
    if not d:
        return None
    try:
        return SceneBounds(
            width=float(d["width"]),
            height=float(d["height"]),
            padding=float(d.get("padding", 0.0)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise StateLoadError(f"Invalid scene bounds: {d!r}") from exc


def snapshot_from_dict(d: Mapping[str, Any]) -> StateSnapshot:
    if not isinstance(d, Mapping):
        raise StateLoadError("Render state payload must be a JSON object")
    config_payload = d.get("config") or {}
    if not isinstance(config_payload, Mapping):
        raise StateLoadError("config must be a JSON object")
    try:
        config = RenderConfig.from_dict(config_payload)
    except TypeError as exc:
        raise StateLoadError(f"Invalid config: {exc}") from exc

    state = RenderState(
        geometry=_geometry_from_dict(d.get("geometry")),
        interior_walls=tuple(
            _segments_from_list(d.get("interior_walls", d.get("interiorWalls")), WallSegment, "interior_walls")
        ),
        doors=tuple(_segments_from_list(d.get("doors"), DoorSegment, "doors")),
        config=config,
    )
    return StateSnapshot(state=state, scene=_scene_from_dict(d.get("scene")))


def snapshot_to_dict(snapshot: StateSnapshot) -> Dict[str, Any]:
    state = snapshot.state
    out: Dict[str, Any] = {
        "geometry": mapping(to_shapely(state.geometry)) if state.geometry is not None else None,
        "interior_walls": [list(w.as_tuple()) for w in state.interior_walls],
        "doors": [list(dr.as_tuple()) for dr in state.doors],
        "config": state.config.to_dict(),
    }
    if snapshot.scene is not None:
        out["scene"] = {
            "width": snapshot.scene.width,
            "height": snapshot.scene.height,
            "padding": snapshot.scene.padding,
        }
    # mapping() yields nested tuples; normalise for json.
    return json.loads(json.dumps(out))


def load_snapshot(path: Path) -> StateSnapshot:
    p = Path(path).expanduser().resolve()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise StateLoadError(f"{p} is not valid JSON: {exc}") from exc
    return snapshot_from_dict(payload)


def save_snapshot(snapshot: StateSnapshot, path: Path) -> Path:
    p = Path(path).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(snapshot_to_dict(snapshot), indent=2, sort_keys=True), encoding="utf-8")
    return p
