"""Cross-section shapes.

Each shape kind is one ``CrossSection`` subclass that knows its area factor
(area divided by the squared side length) and how to build the solid of a
single slice. Adding a shape means adding a subclass and registering it in
``_SHAPES``; ``cross_section`` fails loudly for an unregistered kind.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from volumize.mesh import (
    SEMICIRCLE_SEGMENTS, Mesh, Vec3, box, half_cylinder, triangular_prism,
)


class ShapeKind(Enum):
    """The supported cross-section shapes."""
    SQUARE = "square"
    SEMICIRCLE = "semicircle"
    EQUILATERAL_TRIANGLE = "equilateral"

    @classmethod
    def parse(cls, value: Union[str, "ShapeKind"]) -> "ShapeKind":
        """Accept a ``ShapeKind`` or one of its names or aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return _ALIASES[key]
        except KeyError:
            choices = ", ".join(sorted(_ALIASES))
            raise ValueError(f"unknown shape {value!r} (expected one of: {choices})") from None


_ALIASES = {
    "square": ShapeKind.SQUARE,
    "rectangle": ShapeKind.SQUARE,
    "semicircle": ShapeKind.SEMICIRCLE,
    "equilateral": ShapeKind.EQUILATERAL_TRIANGLE,
    "equilateral_triangle": ShapeKind.EQUILATERAL_TRIANGLE,
    "triangle": ShapeKind.EQUILATERAL_TRIANGLE,
}


@dataclass(frozen=True)
class Placement:
    """Where a renderer should put a slice primitive.

    ``position`` is the primitive's origin, ``rotation`` XYZ Euler angles in
    radians, ``parameters`` the primitive's own dimensions.
    """
    primitive: str
    position: Vec3
    rotation: Vec3
    parameters: Dict[str, Any]


class CrossSection(ABC):
    """A cross-section shape whose side is the gap between two curves."""

    kind: ShapeKind
    label: str
    area_formula: str

    @property
    @abstractmethod
    def area_factor(self) -> float:
        """Area of the shape divided by its squared side length."""

    def area(self, side: float) -> float:
        return self.area_factor * side * side

    @abstractmethod
    def placement(self, x: float, center_y: float, height: float,
                  thickness: float) -> Placement:
        """Primitive descriptor for a slice centered at ``x``."""

    @abstractmethod
    def solid(self, x: float, center_y: float, height: float,
              thickness: float) -> Mesh:
        """World-space closed mesh of a slice centered at ``x``."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Square(CrossSection):
    """Square slices: a box ``thickness`` by ``h`` by ``h``.

    The box spans the curve gap vertically and sits in front of the curve
    plane, from ``z = 0`` to ``z = h``.
    """

    kind = ShapeKind.SQUARE
    label = "Square"
    area_formula = "s²"

    @property
    def area_factor(self) -> float:
        return 1.0

    def placement(self, x, center_y, height, thickness):
        return Placement(
            primitive="rectangle",
            position=(x, center_y, height / 2.0),
            rotation=(0.0, 0.0, 0.0),
            parameters={"width": thickness, "height": height, "depth": height},
        )

    def solid(self, x, center_y, height, thickness):
        return box((x, center_y, height / 2.0), (thickness, height, height))


class Semicircle(CrossSection):
    """Semicircular slices with the diameter along the curve gap.

    The flat face lies in the curve plane and the curved face bulges toward
    +z. The radius is ``h/2``, so the area is ``(π/2)(h/2)² = (π/8)h²``.
    """

    kind = ShapeKind.SEMICIRCLE
    label = "Semicircle"
    area_formula = "(π/2)r² where r = s/2, so A = (π/8)s²"

    def __init__(self, segments: int = SEMICIRCLE_SEGMENTS):
        self.segments = segments

    @property
    def area_factor(self) -> float:
        return math.pi / 8.0

    def placement(self, x, center_y, height, thickness):
        # A y-axis cylinder turned onto the x axis with its half facing +z
        return Placement(
            primitive="semicircle",
            position=(x, center_y, 0.0),
            rotation=(math.pi / 2.0, 0.0, math.pi / 2.0),
            parameters={
                "radius": height / 2.0,
                "length": thickness,
                "segments": self.segments,
                "theta_start": 0.0,
                "theta_length": math.pi,
            },
        )

    def solid(self, x, center_y, height, thickness):
        return half_cylinder((x, center_y, 0.0), height / 2.0, thickness, self.segments)

    def __repr__(self) -> str:
        return f"Semicircle(segments={self.segments})"


class EquilateralTriangle(CrossSection):
    """Equilateral triangle slices with one side along the curve gap.

    The apex points toward +z at the equilateral height ``h·√3/2``.
    """

    kind = ShapeKind.EQUILATERAL_TRIANGLE
    label = "Equilateral Triangle"
    area_formula = "(√3/4)s²"

    @property
    def area_factor(self) -> float:
        return math.sqrt(3.0) / 4.0

    def placement(self, x, center_y, height, thickness):
        return Placement(
            primitive="triangle",
            position=(x, center_y, 0.0),
            rotation=(0.0, math.pi / 2.0, 0.0),
            parameters={
                "base": height,
                "altitude": height * math.sqrt(3.0) / 2.0,
                "depth": thickness,
            },
        )

    def solid(self, x, center_y, height, thickness):
        return triangular_prism((x, center_y, 0.0), height,
                                height * math.sqrt(3.0) / 2.0, thickness)


_SHAPES: Dict[ShapeKind, CrossSection] = {
    ShapeKind.SQUARE: Square(),
    ShapeKind.SEMICIRCLE: Semicircle(),
    ShapeKind.EQUILATERAL_TRIANGLE: EquilateralTriangle(),
}


def cross_section(shape: Union[str, ShapeKind, CrossSection]) -> CrossSection:
    """Return the ``CrossSection`` for a kind, a shape name or an instance."""
    if isinstance(shape, CrossSection):
        return shape
    kind = ShapeKind.parse(shape)
    try:
        return _SHAPES[kind]
    except KeyError:  # pragma: no cover - every kind is registered
        raise NotImplementedError(f"no cross-section registered for {kind}") from None


def area_factor(shape: Union[str, ShapeKind, CrossSection]) -> float:
    return cross_section(shape).area_factor


def shape_kinds() -> Tuple[ShapeKind, ...]:
    return tuple(ShapeKind)
