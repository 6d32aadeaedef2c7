"""Export helpers for volumize scenes."""

from .stl import write_stl
from .scene_json import SCHEMA_ID, scene_to_dict, write_scene_json

__all__ = ["SCHEMA_ID", "scene_to_dict", "write_scene_json", "write_stl"]
