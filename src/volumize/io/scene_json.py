"""Scene JSON serialization for external viewers."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional

from volumize import __version__
from volumize.mesh import Mesh
from volumize.sampling import SamplePoint
from volumize.scene import Scene
from volumize.slices import SliceMesh

SCHEMA_ID = "volumize-scene-json-v0.1"


def _float_vec(vec: Iterable[float]) -> List[float]:
    return [float(c) for c in vec]


def _serialize_mesh(mesh: Optional[Mesh]) -> Optional[Dict[str, Any]]:
    if mesh is None:
        return None
    return {
        "vertices": [_float_vec(v) for v in mesh.vertices],
        "faces": [[int(i) for i in face] for face in mesh.faces],
    }


def _serialize_curve(points: List[SamplePoint]) -> List[List[float]]:
    return [[float(p.x), float(p.y)] for p in points]


def _serialize_slice(sl: SliceMesh) -> Dict[str, Any]:
    return {
        "index": sl.index,
        "x": float(sl.x),
        "top": float(sl.top),
        "bottom": float(sl.bottom),
        "height": float(sl.height),
        "thickness": float(sl.thickness),
        "shape": sl.shape.value,
        "primitive": sl.primitive,
        "position": _float_vec(sl.position),
        "rotation": _float_vec(sl.rotation),
        "parameters": dict(sl.parameters),
        "color": _float_vec(sl.color),
        "mesh": _serialize_mesh(sl.mesh),
    }


def scene_to_dict(scene: Scene) -> Dict[str, Any]:
    """Return a JSON-serializable document describing ``scene``."""
    params = scene.parameters
    return {
        "schema": SCHEMA_ID,
        "generator": {"name": "volumize", "version": __version__},
        "parameters": {
            "top": params.top,
            "bottom": params.bottom,
            "a": float(params.a),
            "b": float(params.b),
            "shape": params.shape.value,
            "subdivisions": params.subdivisions,
            "show_area": params.show_area,
        },
        "volume": float(scene.volume),
        "volume_text": scene.volume_text,
        "axis_range": {
            "x": _float_vec(scene.axis_range.x),
            "y": _float_vec(scene.axis_range.y),
            "z": _float_vec(scene.axis_range.z),
        },
        "curves": {
            "top": _serialize_curve(scene.top_curve),
            "bottom": _serialize_curve(scene.bottom_curve),
        },
        "ribbon": _serialize_mesh(scene.ribbon),
        "slices": [_serialize_slice(sl) for sl in scene.slices],
    }


def write_scene_json(scene: Scene, path_or_file, *, indent: Optional[int] = 2) -> None:
    """Write ``scene`` as JSON to a path or an open text stream."""
    doc = scene_to_dict(scene)
    if hasattr(path_or_file, 'write'):
        json.dump(doc, path_or_file, indent=indent)
        return
    with open(path_or_file, 'w', encoding='utf-8') as stream:
        json.dump(doc, stream, indent=indent)
