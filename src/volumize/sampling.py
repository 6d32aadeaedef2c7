"""Sampling curves ``y = f(x)`` over an interval.

Every routine here coerces failed evaluations to 0 and clamps negative
values to 0: a curve below the axis, or one that is undefined, contributes
zero height.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from volumize.config import AREA_RESOLUTION, CURVE_RESOLUTION
from volumize.expr import EvalResult, evaluate, is_failure, value_or_zero

__all__ = [
    "AreaSeries",
    "MidpointSample",
    "SamplePoint",
    "clamped_value",
    "midpoint_samples",
    "sample",
    "sample_area",
]


@dataclass(frozen=True)
class SamplePoint:
    x: float
    y: float


def clamped_value(result: EvalResult) -> float:
    """Failure → 0, negative → 0, anything else unchanged."""
    return max(0.0, value_or_zero(result))


def _check_resolution(resolution: int) -> None:
    if resolution <= 0:
        raise ValueError(f"resolution must be positive, got {resolution}")


def _grid(a: float, b: float, resolution: int) -> List[float]:
    return [a + (i / resolution) * (b - a) for i in range(resolution + 1)]


def sample(expr: Optional[str], a: float, b: float,
           resolution: int = CURVE_RESOLUTION) -> List[SamplePoint]:
    """
    Sample ``expr`` at ``resolution + 1`` evenly spaced points from ``a`` to
    ``b`` inclusive.

    Works for ``a > b`` (points run from ``a`` down to ``b``).

    Raises:
        ValueError: if ``resolution`` is not positive
    """
    _check_resolution(resolution)
    return [SamplePoint(x, clamped_value(evaluate(expr, x))) for x in _grid(a, b, resolution)]


@dataclass(frozen=True)
class AreaSeries:
    """Top and bottom curves sampled on the same x grid."""
    top: List[SamplePoint]
    bottom: List[SamplePoint]

    def __len__(self) -> int:
        return len(self.top)

    def rows(self) -> List[Tuple[float, float, float]]:
        """Return ``(x, top, bottom)`` triples."""
        return [(t.x, t.y, b.y) for t, b in zip(self.top, self.bottom)]


def sample_area(top: Optional[str], bottom: Optional[str], a: float, b: float,
                resolution: int = AREA_RESOLUTION) -> AreaSeries:
    """Sample both curves on a shared grid for the area overlay."""
    _check_resolution(resolution)
    xs = _grid(a, b, resolution)
    return AreaSeries(
        top=[SamplePoint(x, clamped_value(evaluate(top, x))) for x in xs],
        bottom=[SamplePoint(x, clamped_value(evaluate(bottom, x))) for x in xs],
    )


@dataclass(frozen=True)
class MidpointSample:
    """Raw evaluations at the midpoint of subinterval ``index``."""
    index: int
    x: float
    top: EvalResult
    bottom: EvalResult

    @property
    def failed(self) -> bool:
        return is_failure(self.top) or is_failure(self.bottom)

    def clamped(self) -> Tuple[float, float]:
        """``(top, bottom)`` with failures and negatives coerced to 0."""
        return clamped_value(self.top), clamped_value(self.bottom)


def midpoint_samples(top: Optional[str], bottom: Optional[str], a: float, b: float,
                     n: int) -> Tuple[float, List[MidpointSample]]:
    """
    Split ``[a, b]`` into ``n`` equal subintervals and evaluate both curves
    at each midpoint ``a + i·δ + δ/2``.

    Returns ``(δ, samples)``; ``δ`` is negative when ``a > b``. For
    ``n <= 0`` the result is ``(0.0, [])``.
    """
    if n <= 0:
        return 0.0, []
    delta = (b - a) / n
    samples = []
    for i in range(n):
        x = a + i * delta + delta / 2.0
        samples.append(MidpointSample(i, x, evaluate(top, x), evaluate(bottom, x)))
    return delta, samples
