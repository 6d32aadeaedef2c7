"""Cross-section solids, one per subinterval.

``build_slices`` samples the curves at the same midpoints as the volume
estimate and turns every plausible slice into a ``SliceMesh``: a
descriptor a renderer can place (primitive, position, rotation,
dimensions, color) together with the equivalent world-space mesh.

Slices are skipped, never raised, when

* either curve fails to evaluate at the midpoint,
* the height ``|top − bottom|`` is below ``MIN_SLICE_HEIGHT`` or above
  ``MAX_SLICE_HEIGHT`` (too thin to see, or a runaway value near a
  singularity),
* the interval is empty (``a == b``), so slices have no thickness.
* the solid cannot be built, because the slab is too thin for its
  section.
"""

from __future__ import annotations

import colorsys
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from volumize.config import MAX_SLICE_HEIGHT, MIN_SLICE_HEIGHT, SLICE_GAP_FACTOR
from volumize.mesh import Mesh, Vec3, epsilon
from volumize.sampling import midpoint_samples
from volumize.shapes import CrossSection, ShapeKind, cross_section

__all__ = ["SliceMesh", "build_slices", "slice_color"]

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class SliceMesh:
    """One cross-section solid."""

    index: int
    x: float
    top: float
    bottom: float
    thickness: float
    shape: ShapeKind
    primitive: str
    position: Vec3
    rotation: Vec3
    parameters: Dict[str, Any]
    color: RGB
    mesh: Mesh

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0


def slice_color(index: int, count: int) -> RGB:
    """RGB color whose hue advances with the slice index."""
    hue = (index / count) * 0.8 + 0.1
    return colorsys.hls_to_rgb(hue, 0.6, 0.8)


def build_slices(top: Optional[str], bottom: Optional[str], a: float, b: float,
                 shape: Union[str, ShapeKind, CrossSection], n: int,
                 min_height: float = MIN_SLICE_HEIGHT,
                 max_height: float = MAX_SLICE_HEIGHT) -> List[SliceMesh]:
    """
    Build the slice solids for ``n`` subintervals of ``[a, b]``.

    Returns slices in subinterval order; skipped slices leave gaps in the
    ``index`` sequence. ``n <= 0`` gives an empty list.
    """
    section = cross_section(shape)
    delta, samples = midpoint_samples(top, bottom, a, b, n)
    thickness = abs(delta) * SLICE_GAP_FACTOR
    if samples and thickness <= epsilon:
        logger.debug("empty interval [%g, %g], no slices", a, b)
        return []

    slices = []
    for s in samples:
        if s.failed:
            logger.debug("slice %d at x=%g skipped: evaluation failed", s.index, s.x)
            continue
        t, bt = s.clamped()
        h = abs(t - bt)
        if h < min_height or h > max_height:
            logger.debug("slice %d at x=%g skipped: height %g out of range", s.index, s.x, h)
            continue

        center_y = (t + bt) / 2.0
        try:
            solid = section.solid(s.x, center_y, h, thickness)
        except ValueError as e:
            logger.debug("slice %d at x=%g skipped: %s", s.index, s.x, e)
            continue
        placement = section.placement(s.x, center_y, h, thickness)
        slices.append(SliceMesh(
            index=s.index,
            x=s.x,
            top=t,
            bottom=bt,
            thickness=thickness,
            shape=section.kind,
            primitive=placement.primitive,
            position=placement.position,
            rotation=placement.rotation,
            parameters=placement.parameters,
            color=slice_color(s.index, n),
            mesh=solid,
        ))

    logger.debug("built %d of %d %s slices", len(slices), n, section.kind.value)
    return slices
