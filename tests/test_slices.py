"""Tests for the cross-section slice builder."""

import logging
import math

import pytest

from volumize.config import MAX_SLICE_HEIGHT, MIN_SLICE_HEIGHT
from volumize.shapes import ShapeKind, Square
from volumize.slices import build_slices, slice_color


class TestDefaultScene:
    """Squares between 2x and x^2 on [0, 1.5]."""

    @pytest.fixture
    def slices(self):
        return build_slices("2*x", "x^2", 0.0, 1.5, ShapeKind.SQUARE, 25)

    def test_every_slice_present(self, slices):
        assert [s.index for s in slices] == list(range(25))

    def test_midpoints_and_thickness(self, slices):
        assert slices[0].x == pytest.approx(0.03)
        assert slices[-1].x == pytest.approx(1.47)
        assert all(s.thickness == pytest.approx(0.054) for s in slices)

    def test_slice_values(self, slices):
        s = slices[10]
        assert s.top == pytest.approx(2 * s.x)
        assert s.bottom == pytest.approx(s.x ** 2)
        assert s.height == pytest.approx(abs(s.top - s.bottom))
        assert s.center_y == pytest.approx((s.top + s.bottom) / 2)
        assert s.position == pytest.approx((s.x, s.center_y, s.height / 2))
        assert s.primitive == "rectangle"
        assert s.shape is ShapeKind.SQUARE

    def test_meshes_match_slice_volume(self, slices):
        for s in slices:
            assert s.mesh.is_closed()
            assert s.mesh.signed_volume() == pytest.approx(s.height ** 2 * s.thickness)

    def test_slices_span_the_curve_gap(self, slices):
        s = slices[12]
        lo, hi = s.mesh.bbox()
        assert lo[1] == pytest.approx(s.bottom)
        assert hi[1] == pytest.approx(s.top)
        assert lo[0] == pytest.approx(s.x - s.thickness / 2)


class TestExclusion:

    def test_thin_slice_skipped(self):
        slices = build_slices("x", "0", 0.0, 1.0, "square", 100)
        assert len(slices) == 99
        assert slices[0].index == 1

    def test_tall_slice_skipped(self):
        slices = build_slices("x^3", "0", 0.0, 3.0, "square", 3)
        assert [s.index for s in slices] == [0, 1]

    def test_failed_evaluation_skipped(self):
        slices = build_slices("sqrt(x)", "0", -1.0, 1.0, "square", 2)
        assert [s.index for s in slices] == [1]

    def test_failed_bottom_skipped(self):
        """Unlike the volume, a slice needs both curves to evaluate."""
        slices = build_slices("1", "ln(x)", -1.0, 1.0, "square", 2)
        assert [s.index for s in slices] == [1]

    @pytest.mark.parametrize("top,bottom,a,b,n", [
        ("1/(x - 0.5)", "0", 0.0, 1.0, 40),
        ("tan(x)", "x^2", -3.0, 3.0, 100),
        ("exp(x)", "sin(x)", -5.0, 5.0, 60),
        ("0.001x", "0", 0.0, 20.0, 50),
    ])
    def test_heights_always_in_range(self, top, bottom, a, b, n):
        for s in build_slices(top, bottom, a, b, "square", n):
            assert MIN_SLICE_HEIGHT <= s.height <= MAX_SLICE_HEIGHT

    def test_malformed_expression_gives_no_slices(self):
        assert build_slices("(x", "0", 0.0, 1.0, "square", 10) == []

    @pytest.mark.parametrize("n", [0, -1])
    def test_nonpositive_subdivisions(self, n):
        assert build_slices("1", "0", 0.0, 1.0, "square", n) == []

    def test_empty_interval(self):
        assert build_slices("1", "0", 1.0, 1.0, "square", 10) == []

    @pytest.mark.parametrize("shape", list(ShapeKind))
    def test_tiny_interval_builds_thin_slices(self, shape):
        slices = build_slices("0.05", "0", 0.0, 1e-9, shape, 10)
        assert len(slices) == 10
        assert all(s.thickness == pytest.approx(9e-11) for s in slices)

    def test_unbuildable_solid_skipped(self, caplog):
        class Brittle(Square):
            def solid(self, x, center_y, height, thickness):
                if x > 0.5:
                    raise ValueError("bad offset passed to extrude")
                return super().solid(x, center_y, height, thickness)

        with caplog.at_level(logging.DEBUG, logger="volumize.slices"):
            slices = build_slices("1", "0", 0.0, 1.0, Brittle(), 4)
        assert [s.index for s in slices] == [0, 1]
        assert "bad offset" in caplog.text

    def test_overlong_expression_gives_no_slices(self):
        long_sum = "+".join(["x"] * 5000)
        assert build_slices(long_sum, "0", 0.0, 1.0, "square", 10) == []


class TestShapes:

    def test_semicircle_slices(self):
        slices = build_slices("2", "0", 0.0, 1.0, ShapeKind.SEMICIRCLE, 4)
        assert len(slices) == 4
        s = slices[0]
        assert s.primitive == "semicircle"
        assert s.position == pytest.approx((0.125, 1.0, 0.0))
        assert s.rotation == pytest.approx((math.pi / 2, 0.0, math.pi / 2))
        assert s.parameters["radius"] == pytest.approx(1.0)
        assert s.mesh.is_closed()
        lo, hi = s.mesh.bbox()
        assert hi[2] == pytest.approx(1.0)

    def test_triangle_slices(self):
        slices = build_slices("2", "0", 0.0, 1.0, "equilateral", 4)
        s = slices[0]
        assert s.primitive == "triangle"
        assert s.parameters["altitude"] == pytest.approx(math.sqrt(3.0))
        assert s.mesh.signed_volume() == pytest.approx(math.sqrt(3.0) * s.thickness)

    def test_reversed_interval(self):
        forward = build_slices("2*x", "x^2", 0.0, 1.5, "square", 25)
        backward = build_slices("2*x", "x^2", 1.5, 0.0, "square", 25)
        assert len(backward) == len(forward)
        assert backward[0].x == pytest.approx(forward[-1].x)
        assert backward[0].thickness == pytest.approx(forward[0].thickness)
        assert backward[0].mesh.signed_volume() > 0


def test_slice_colors():
    colors = [slice_color(i, 10) for i in range(10)]
    for rgb in colors:
        assert len(rgb) == 3
        assert all(0.0 <= c <= 1.0 for c in rgb)
    assert len(set(colors)) == 10


def test_build_is_repeatable():
    first = build_slices("sin(x) + 1", "0", 0.0, 3.0, "semicircle", 30)
    second = build_slices("sin(x) + 1", "0", 0.0, 3.0, "semicircle", 30)
    assert [(s.x, s.height) for s in first] == [(s.x, s.height) for s in second]
