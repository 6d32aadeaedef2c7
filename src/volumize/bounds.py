"""Axis ranges for displaying a scene."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from volumize.config import AXIS_SAMPLES
from volumize.expr import evaluate, is_failure

__all__ = ["AxisRange", "estimate_axis_range"]

Bounds = Tuple[float, float]


@dataclass(frozen=True)
class AxisRange:
    x: Bounds = (0.0, 2.0)
    y: Bounds = (0.0, 3.0)
    z: Bounds = (0.0, 2.0)


def estimate_axis_range(top: Optional[str], bottom: Optional[str], a: float, b: float,
                        samples: int = AXIS_SAMPLES) -> AxisRange:
    """
    Coarse pre-scan of both curves to size the axes.

    Samples ``samples + 1`` points over ``[a, max(b, 1.5) + 0.5]``. A point
    counts only if ``x >= 0`` and both curves evaluate to non-negative
    values there. The y axis gets 30% headroom over the tallest value (at
    least 3), the z axis 10% (at least 2).
    """
    x_max = max(b, 1.5) + 0.5
    max_height = 0.0

    if samples > 0:
        for i in range(samples + 1):
            x = a + i * (x_max - a) / samples
            if x < 0:
                continue
            t = evaluate(top, x)
            bt = evaluate(bottom, x)
            if is_failure(t) or is_failure(bt):
                continue
            if t >= 0 and bt >= 0:
                max_height = max(max_height, t, bt)

    return AxisRange(
        x=(0.0, x_max),
        y=(0.0, max(max_height * 1.3, 3.0)),
        z=(0.0, max(max_height * 1.1, 2.0)),
    )
