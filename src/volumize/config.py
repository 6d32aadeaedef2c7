"""Scene parameters, defaults and YAML configuration loading.

A scene file is a flat YAML mapping; every key is optional and falls back
to the defaults below::

    top: "2*x"
    bottom: "x^2"
    a: 0
    b: 1.5
    shape: square          # square | semicircle | equilateral
    subdivisions: 25
    show_area: true

Environment Variables:
    VOLUMIZE_CONFIG: path of a scene file the command line interface loads
                     when no ``--config`` option is given.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from volumize.mesh import SEMICIRCLE_SEGMENTS
from volumize.shapes import ShapeKind

__all__ = [
    "AREA_RESOLUTION",
    "AXIS_SAMPLES",
    "CURVE_RESOLUTION",
    "ConfigError",
    "MAX_SLICE_HEIGHT",
    "MIN_SLICE_HEIGHT",
    "SEMICIRCLE_SEGMENTS",
    "SLICE_GAP_FACTOR",
    "SUBDIVISION_RANGE",
    "SceneParameters",
    "VOLUMIZE_CONFIG",
    "config_path_from_env",
    "load_parameters",
    "parameters_from_mapping",
]

logger = logging.getLogger(__name__)

# Environment variable naming a default scene file
VOLUMIZE_CONFIG = "VOLUMIZE_CONFIG"

# Sampling resolutions (number of intervals)
CURVE_RESOLUTION = 300
AREA_RESOLUTION = 100
AXIS_SAMPLES = 20

# Slices outside [MIN, MAX] height are not rendered
MIN_SLICE_HEIGHT = 0.01
MAX_SLICE_HEIGHT = 10.0

# Fraction of the subinterval width a slice occupies along x
SLICE_GAP_FACTOR = 0.9

# Subdivision counts the interactive front end offers
SUBDIVISION_RANGE = (10, 100)


class ConfigError(ValueError):
    """Invalid scene configuration."""


@dataclass(frozen=True)
class SceneParameters:
    """Every input the core computations depend on."""

    top: str = "2*x"
    bottom: str = "x^2"
    a: float = 0.0
    b: float = 1.5
    shape: ShapeKind = ShapeKind.SQUARE
    subdivisions: int = 25
    show_area: bool = True


def _as_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from None
    if not math.isfinite(result):
        raise ConfigError(f"'{key}' must be finite, got {value!r}")
    return result


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        try:
            value = int(str(value).strip())
        except ValueError:
            raise ConfigError(f"'{key}' must be an integer, got {value!r}") from None
    return value


def _as_expression(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an expression, got {value!r}")
    if isinstance(value, (int, float)):
        return repr(value) if isinstance(value, float) else str(value)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be an expression, got {value!r}")
    return value


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be true or false, got {value!r}")


def parameters_from_mapping(data: Optional[Mapping[str, Any]],
                            base: Optional[SceneParameters] = None) -> SceneParameters:
    """Build ``SceneParameters`` from a mapping, on top of ``base``.

    Raises:
        ConfigError: on unknown keys or values of the wrong type
    """
    base = base or SceneParameters()
    if data is None:
        return base
    if not isinstance(data, Mapping):
        raise ConfigError(f"scene configuration must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(SceneParameters)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown configuration key(s): {', '.join(map(str, unknown))}")

    values = {}
    for key, value in data.items():
        if key in ("top", "bottom"):
            values[key] = _as_expression(key, value)
        elif key in ("a", "b"):
            values[key] = _as_float(key, value)
        elif key == "shape":
            try:
                values[key] = ShapeKind.parse(value)
            except ValueError as e:
                raise ConfigError(str(e)) from None
        elif key == "subdivisions":
            values[key] = _as_int(key, value)
        elif key == "show_area":
            values[key] = _as_bool(key, value)

    merged = {f.name: getattr(base, f.name) for f in fields(SceneParameters)}
    merged.update(values)
    params = SceneParameters(**merged)

    lo, hi = SUBDIVISION_RANGE
    if not lo <= params.subdivisions <= hi:
        logger.warning("subdivisions=%d is outside the usual range %d..%d",
                       params.subdivisions, lo, hi)
    return params


def load_parameters(path: Union[str, Path],
                    base: Optional[SceneParameters] = None) -> SceneParameters:
    """Load scene parameters from a YAML file.

    Raises:
        ConfigError: if the file is missing, is not valid YAML or holds
            invalid values
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read configuration {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    logger.debug("loaded scene configuration from %s", path)
    return parameters_from_mapping(data, base)


def config_path_from_env() -> Optional[Path]:
    """Return the scene file named by ``VOLUMIZE_CONFIG``, if set."""
    value = os.environ.get(VOLUMIZE_CONFIG, "").strip()
    return Path(value) if value else None
