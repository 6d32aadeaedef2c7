"""Tests for cross-section shapes."""

import math

import pytest

from volumize.config import SEMICIRCLE_SEGMENTS
from volumize.shapes import (
    CrossSection,
    EquilateralTriangle,
    Semicircle,
    ShapeKind,
    Square,
    area_factor,
    cross_section,
    shape_kinds,
)


@pytest.mark.parametrize("name,kind", [
    ("square", ShapeKind.SQUARE),
    ("rectangle", ShapeKind.SQUARE),
    ("Square", ShapeKind.SQUARE),
    ("semicircle", ShapeKind.SEMICIRCLE),
    ("equilateral", ShapeKind.EQUILATERAL_TRIANGLE),
    ("equilateral-triangle", ShapeKind.EQUILATERAL_TRIANGLE),
    ("triangle", ShapeKind.EQUILATERAL_TRIANGLE),
    (ShapeKind.SEMICIRCLE, ShapeKind.SEMICIRCLE),
])
def test_parse(name, kind):
    assert ShapeKind.parse(name) is kind


def test_parse_unknown():
    with pytest.raises(ValueError, match="hexagon"):
        ShapeKind.parse("hexagon")


def test_area_factors():
    assert area_factor("square") == 1.0
    assert area_factor(ShapeKind.SEMICIRCLE) == pytest.approx(math.pi / 8.0)
    assert area_factor("triangle") == pytest.approx(math.sqrt(3.0) / 4.0)
    assert Square().area(3.0) == pytest.approx(9.0)


def test_every_kind_is_registered():
    for kind in shape_kinds():
        section = cross_section(kind)
        assert isinstance(section, CrossSection)
        assert section.kind is kind


def test_cross_section_passes_instances_through():
    section = Semicircle(segments=32)
    assert cross_section(section) is section
    assert repr(section) == "Semicircle(segments=32)"


class TestPlacement:

    def test_square(self):
        p = Square().placement(0.5, 1.0, 2.0, 0.1)
        assert p.primitive == "rectangle"
        assert p.position == (0.5, 1.0, 1.0)
        assert p.rotation == (0.0, 0.0, 0.0)
        assert p.parameters == {"width": 0.1, "height": 2.0, "depth": 2.0}

    def test_semicircle(self):
        p = Semicircle().placement(0.5, 1.0, 2.0, 0.1)
        assert p.position == (0.5, 1.0, 0.0)
        assert p.rotation == pytest.approx((math.pi / 2.0, 0.0, math.pi / 2.0))
        assert p.parameters["radius"] == 1.0
        assert p.parameters["segments"] == 16
        assert p.parameters["theta_length"] == pytest.approx(math.pi)

    def test_triangle(self):
        p = EquilateralTriangle().placement(0.5, 1.0, 2.0, 0.1)
        assert p.position == (0.5, 1.0, 0.0)
        assert p.rotation == pytest.approx((0.0, math.pi / 2.0, 0.0))
        assert p.parameters["altitude"] == pytest.approx(math.sqrt(3.0))


class TestSolids:
    """Slice solids enclose the shape area times the thickness."""

    def test_square_solid(self):
        mesh = Square().solid(0.5, 1.0, 2.0, 0.1)
        assert mesh.is_closed()
        assert mesh.signed_volume() == pytest.approx(4.0 * 0.1)
        lo, hi = mesh.bbox()
        assert lo == pytest.approx((0.45, 0.0, 0.0))
        assert hi == pytest.approx((0.55, 2.0, 2.0))

    def test_triangle_solid(self):
        mesh = EquilateralTriangle().solid(0.5, 1.0, 2.0, 0.1)
        assert mesh.is_closed()
        assert mesh.signed_volume() == pytest.approx(math.sqrt(3.0) / 4.0 * 4.0 * 0.1)

    def test_semicircle_solid(self):
        mesh = Semicircle().solid(0.5, 1.0, 2.0, 0.1)
        assert mesh.is_closed()
        expected = math.pi / 8.0 * 4.0 * 0.1
        assert mesh.signed_volume() == pytest.approx(expected, rel=1e-2)
        lo, hi = mesh.bbox()
        assert lo[1] == pytest.approx(0.0)
        assert hi[1] == pytest.approx(2.0)
        assert lo[2] == pytest.approx(0.0)
        assert hi[2] == pytest.approx(1.0)


def test_semicircle_resolution_follows_config():
    section = cross_section("semicircle")
    assert section.segments == SEMICIRCLE_SEGMENTS
    assert section.placement(0.5, 1.0, 2.0, 0.1).parameters["segments"] == SEMICIRCLE_SEGMENTS
    # caps fan out from the diameter, two side triangles per facet edge
    assert len(section.solid(0.5, 1.0, 2.0, 0.1)) == 4 * SEMICIRCLE_SEGMENTS
