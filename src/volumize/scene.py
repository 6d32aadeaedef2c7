"""Everything a viewer needs for one set of scene parameters.

A scene is recomputed in full whenever any parameter changes; nothing is
cached between calls apart from compiled expressions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from volumize.bounds import AxisRange, estimate_axis_range
from volumize.config import AREA_RESOLUTION, CURVE_RESOLUTION, SceneParameters
from volumize.mesh import Mesh, merge
from volumize.ribbon import build_area_ribbon
from volumize.sampling import SamplePoint, sample
from volumize.slices import SliceMesh, build_slices
from volumize.volume import estimate_volume, format_volume

__all__ = ["Scene", "build_scene"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    parameters: SceneParameters
    axis_range: AxisRange
    top_curve: List[SamplePoint]
    bottom_curve: List[SamplePoint]
    ribbon: Optional[Mesh]
    slices: List[SliceMesh]
    volume: float

    @property
    def volume_text(self) -> str:
        return format_volume(self.volume)

    def solid(self, with_ribbon: bool = False) -> Mesh:
        """All slice solids as one mesh, optionally with the area overlay."""
        meshes = [sl.mesh for sl in self.slices]
        if with_ribbon and self.ribbon is not None:
            meshes.append(self.ribbon)
        return merge(meshes)


def build_scene(params: SceneParameters) -> Scene:
    """Compute axis ranges, curves, overlay, slices and volume.

    Curves and the overlay span the displayed x axis, ``[0, x_max]``;
    slices and the volume use the interval ``[a, b]``.
    """
    axis_range = estimate_axis_range(params.top, params.bottom, params.a, params.b)
    x0, x1 = axis_range.x

    ribbon = None
    if params.show_area:
        ribbon = build_area_ribbon(params.top, params.bottom, x0, x1, AREA_RESOLUTION)

    scene = Scene(
        parameters=params,
        axis_range=axis_range,
        top_curve=sample(params.top, x0, x1, CURVE_RESOLUTION),
        bottom_curve=sample(params.bottom, x0, x1, CURVE_RESOLUTION),
        ribbon=ribbon,
        slices=build_slices(params.top, params.bottom, params.a, params.b,
                            params.shape, params.subdivisions),
        volume=estimate_volume(params.top, params.bottom, params.a, params.b,
                               params.shape, params.subdivisions),
    )
    logger.info("scene: %d slices, volume %s", len(scene.slices), scene.volume_text)
    return scene
