"""Filled ribbon between the two curves, drawn as a translucent overlay."""

from __future__ import annotations

from typing import Optional

from volumize.config import AREA_RESOLUTION
from volumize.mesh import Mesh
from volumize.sampling import sample_area

__all__ = ["RIBBON_Z", "build_area_ribbon"]

# Slightly in front of the curve plane so the overlay does not z-fight
RIBBON_Z = 0.002


def build_area_ribbon(top: Optional[str], bottom: Optional[str], a: float, b: float,
                      resolution: int = AREA_RESOLUTION) -> Mesh:
    """
    Triangulate the region between the curves over ``[a, b]``.

    The vertex list is the top rail (``resolution + 1`` points, left to
    right) followed by the bottom rail in reverse. Quad ``i`` joins top
    points ``i, i+1`` with their bottom partners, stored at
    ``N + (N − 1 − i)`` and ``N + (N − 1 − (i + 1))``.
    """
    series = sample_area(top, bottom, a, b, resolution)
    top_rail = [(p.x, p.y, RIBBON_Z) for p in series.top]
    bottom_rail = [(p.x, p.y, RIBBON_Z) for p in reversed(series.bottom)]
    count = len(top_rail)

    faces = []
    for i in range(count - 1):
        bi = count + (count - 1 - i)
        nbi = count + (count - 1 - (i + 1))
        faces.append((i, i + 1, bi))
        faces.append((i + 1, nbi, bi))

    return Mesh(top_rail + bottom_rail, faces)
