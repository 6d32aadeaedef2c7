"""Step-by-step explanation of the volume computation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from volumize.config import SceneParameters
from volumize.shapes import cross_section
from volumize.volume import format_volume

__all__ = ["Step", "format_steps", "pretty_expression", "solution_steps"]


@dataclass(frozen=True)
class Step:
    title: str
    content: str


_PRETTY = (
    ("*", "·"),
    ("sqrt", "√"),
    ("^2", "²"),
    ("^3", "³"),
)


def pretty_expression(expr: Optional[str]) -> str:
    """Typeset an expression for prose (``x^2*sqrt(x)`` → ``x²·√(x)``)."""
    text = (expr or "").strip() or "0"
    for old, new in _PRETTY:
        text = text.replace(old, new)
    return text


def _number(value: float) -> str:
    return f"{value:g}"


def solution_steps(params: SceneParameters, volume: float) -> List[Step]:
    """The five explanation steps for a scene and its computed volume."""
    section = cross_section(params.shape)
    name = section.label.lower()
    top = pretty_expression(params.top)
    bottom = pretty_expression(params.bottom)
    a = _number(params.a)
    b = _number(params.b)
    factor = f"{section.area_factor:.4f}"

    return [
        Step(
            "Problem Setup",
            f"We need to find the volume of a solid where each cross-section "
            f"perpendicular to the x-axis is a {name}.\n\n"
            f"The solid is bounded by:\n"
            f"• Top: y = {top}\n"
            f"• Bottom: y = {bottom}\n"
            f"• Left and right boundaries: x = {a} and x = {b}\n\n"
            f"For any x-value in [{a}, {b}], we slice the solid perpendicular "
            f"to the x-axis to get a {name} cross-section.",
        ),
        Step(
            "Find Cross-Section Dimensions",
            f"At any x-value, the {name} has a side length equal to the "
            f"distance between the top and bottom curves.\n\n"
            f"Side length: s(x) = |{top} − {bottom}|\n\n"
            f"We use absolute value to ensure the side length is always "
            f"positive, regardless of which function is larger.",
        ),
        Step(
            "Calculate Cross-Section Area",
            f"The area of a {name} with side length s is:\n"
            f"• {section.label}: A = {section.area_formula}\n\n"
            f"Substituting our side length:\n"
            f"A(x) = {factor} × [s(x)]²\n"
            f"A(x) = {factor} × [{top} − {bottom}]²\n\n"
            f"This gives us the area of each cross-section as a function of x.",
        ),
        Step(
            "Set Up Volume Integral",
            f"To find the total volume, we integrate the cross-sectional area "
            f"over the interval [{a}, {b}]:\n\n"
            f"∫ A(x) dx  from {a} to {b}\n\n"
            f"Substituting our area function:\n"
            f"∫ {factor} × [{top} − {bottom}]² dx  from {a} to {b}\n\n"
            f"This integral sums up all the infinitesimally thin cross-sections "
            f"from x = {a} to x = {b}.",
        ),
        Step(
            "Final Answer",
            f"Evaluating the integral numerically with the midpoint rule over "
            f"{params.subdivisions} subintervals:\n\n"
            f"V ≈ {format_volume(volume)} cubic units\n\n"
            f"This represents the total volume of the solid with {name} "
            f"cross-sections.",
        ),
    ]


def format_steps(steps: List[Step]) -> str:
    """Render steps as numbered plain text."""
    parts = []
    for i, step in enumerate(steps, start=1):
        parts.append(f"{i}. {step.title}\n{step.content}")
    return "\n\n".join(parts)
