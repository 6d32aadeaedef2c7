"""Tests for the solution step text."""

import pytest

from volumize.config import SceneParameters
from volumize.shapes import ShapeKind
from volumize.steps import format_steps, pretty_expression, solution_steps


@pytest.mark.parametrize("expr,expected", [
    ("x^2", "x²"),
    ("2*x", "2·x"),
    ("x^3 + sqrt(x)", "x³ + √(x)"),
    ("", "0"),
    (None, "0"),
])
def test_pretty_expression(expr, expected):
    assert pretty_expression(expr) == expected


def test_five_steps():
    steps = solution_steps(SceneParameters(), 0.9563)
    assert [s.title for s in steps] == [
        "Problem Setup",
        "Find Cross-Section Dimensions",
        "Calculate Cross-Section Area",
        "Set Up Volume Integral",
        "Final Answer",
    ]


def test_step_contents():
    steps = solution_steps(SceneParameters(), 0.95626)
    assert "Top: y = 2·x" in steps[0].content
    assert "Bottom: y = x²" in steps[0].content
    assert "x = 0 and x = 1.5" in steps[0].content
    assert "s(x) = |2·x − x²|" in steps[1].content
    assert "A(x) = 1.0000 × [s(x)]²" in steps[2].content
    assert "from 0 to 1.5" in steps[3].content
    assert "V ≈ 0.9563 cubic units" in steps[4].content
    assert "25 subintervals" in steps[4].content


def test_shape_specific_text():
    params = SceneParameters(shape=ShapeKind.SEMICIRCLE)
    steps = solution_steps(params, 1.0)
    assert "is a semicircle" in steps[0].content
    assert "A(x) = 0.3927" in steps[2].content
    assert "(π/8)s²" in steps[2].content


def test_format_steps():
    text = format_steps(solution_steps(SceneParameters(), 1.0))
    assert text.startswith("1. Problem Setup\n")
    assert "\n\n5. Final Answer\n" in text
