"""Volume of the solid by the composite midpoint rule."""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from volumize.sampling import midpoint_samples
from volumize.shapes import CrossSection, ShapeKind, cross_section

__all__ = ["estimate_volume", "format_volume"]

logger = logging.getLogger(__name__)


def estimate_volume(top: Optional[str], bottom: Optional[str], a: float, b: float,
                    shape: Union[str, ShapeKind, CrossSection], n: int) -> float:
    """
    Approximate the volume of the solid with the given cross-sections.

    Sums ``area_factor · |top − bottom|² · δ`` over the ``n`` subinterval
    midpoints. A failed evaluation counts as 0 for that curve and negative
    values are clamped to 0; no slice is ever dropped here, however thin or
    tall. The magnitude of the sum is returned, so swapping ``a`` and ``b``
    gives the same volume. ``n <= 0`` gives 0.
    """
    section = cross_section(shape)
    delta, samples = midpoint_samples(top, bottom, a, b, n)
    if not samples:
        return 0.0

    factor = section.area_factor
    terms = []
    for s in samples:
        t, bt = s.clamped()
        h = abs(t - bt)
        terms.append(factor * h * h * delta)

    volume = abs(math.fsum(terms))
    logger.debug("volume of %s slices over [%g, %g] with n=%d: %.6g",
                 section.kind.value, a, b, n, volume)
    return volume


def format_volume(volume: float) -> str:
    """Volume as shown to users, with four decimals."""
    return f"{volume:.4f}"
