"""Triangle meshes and the solid primitives slices are built from.

A ``Mesh`` is an indexed triangle list. Solids produced here are closed and
wound counter-clockwise seen from outside, so their signed volume is
positive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

Vec3 = Tuple[float, float, float]
Face = Tuple[int, int, int]

epsilon = 1e-12

# Facets on the curved face of a half cylinder
SEMICIRCLE_SEGMENTS = 16


def _sub(u: Vec3, v: Vec3) -> Vec3:
    return (u[0] - v[0], u[1] - v[1], u[2] - v[2])


def _add(u: Vec3, v: Vec3) -> Vec3:
    return (u[0] + v[0], u[1] + v[1], u[2] + v[2])


def _cross(u: Vec3, v: Vec3) -> Vec3:
    return (u[1] * v[2] - u[2] * v[1],
            u[2] * v[0] - u[0] * v[2],
            u[0] * v[1] - u[1] * v[0])


def _dot(u: Vec3, v: Vec3) -> float:
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def _mag(u: Vec3) -> float:
    return math.sqrt(_dot(u, u))


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle representation in XYZ space."""

    normal: Vec3
    v0: Vec3
    v1: Vec3
    v2: Vec3


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Optional[Vec3]:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = _cross(_sub(v1, v0), _sub(v2, v0))
    length = _mag(n)
    if length <= epsilon:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


@dataclass
class Mesh:
    """Indexed triangle mesh."""

    vertices: List[Vec3] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.faces)

    def triangles(self) -> Iterator[Triangle]:
        """Yield triangles with unit normals, skipping degenerate faces."""
        for i0, i1, i2 in self.faces:
            v0, v1, v2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
            n = triangle_normal(v0, v1, v2)
            if n is None:
                continue
            yield Triangle(n, v0, v1, v2)

    def signed_volume(self) -> float:
        """
        Volume enclosed by a closed mesh, by the divergence theorem.

        Each face (p0, p1, p2) contributes ``dot(p0, cross(p1, p2)) / 6``,
        the signed volume of the tetrahedron it forms with the origin.
        Positive for outward winding.
        """
        total = 0.0
        for i0, i1, i2 in self.faces:
            p0, p1, p2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
            total += _dot(p0, _cross(p1, p2))
        return total / 6.0

    def surface_area(self) -> float:
        total = 0.0
        for i0, i1, i2 in self.faces:
            v0, v1, v2 = self.vertices[i0], self.vertices[i1], self.vertices[i2]
            total += 0.5 * _mag(_cross(_sub(v1, v0), _sub(v2, v0)))
        return total

    def bbox(self) -> Optional[Tuple[Vec3, Vec3]]:
        """Return ``(min, max)`` corners, or ``None`` for an empty mesh."""
        if not self.vertices:
            return None
        xs, ys, zs = zip(*self.vertices)
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def is_closed(self) -> bool:
        """True if every edge is shared by exactly two faces, in opposite directions."""
        edges: Dict[Tuple[int, int], int] = {}
        for face in self.faces:
            for k in range(3):
                edge = (face[k], face[(k + 1) % 3])
                edges[edge] = edges.get(edge, 0) + 1
        for (i, j), count in edges.items():
            if count != 1 or edges.get((j, i)) != 1:
                return False
        return bool(edges)


def merge(meshes: Iterable[Mesh]) -> Mesh:
    """Concatenate meshes into one, re-indexing faces."""
    result = Mesh()
    for mesh in meshes:
        offset = len(result.vertices)
        result.vertices.extend(mesh.vertices)
        result.faces.extend((a + offset, b + offset, c + offset) for a, b, c in mesh.faces)
    return result


def polygon_normal(profile: Sequence[Vec3]) -> Vec3:
    """Newell normal of a planar polygon; its length is twice the area."""
    nx = ny = nz = 0.0
    count = len(profile)
    for i in range(count):
        p = profile[i]
        q = profile[(i + 1) % count]
        nx += (p[1] - q[1]) * (p[2] + q[2])
        ny += (p[2] - q[2]) * (p[0] + q[0])
        nz += (p[0] - q[0]) * (p[1] + q[1])
    return (nx, ny, nz)


def extrude(profile: Sequence[Vec3], offset: Vec3) -> Mesh:
    """Sweep a convex planar polygon along ``offset`` into a closed prism.

    The profile is reoriented if needed so that it winds counter-clockwise
    around ``offset``; caps are fan triangulated, which requires convexity.

    Raises:
        ValueError: for fewer than three points, a zero-area profile, or an
            offset parallel to the profile plane
    """
    if len(profile) < 3:
        raise ValueError('profile needs at least three points')
    # tolerances are relative to the profile extent and the offset length
    normal = polygon_normal(profile)
    extent = max(_mag(_sub(p, profile[0])) for p in profile)
    if _mag(normal) <= epsilon * extent * extent:
        raise ValueError('degenerate profile passed to extrude')
    along = _dot(normal, offset)
    if abs(along) <= epsilon * _mag(normal) * _mag(offset):
        raise ValueError('bad offset passed to extrude')

    base = list(profile)
    if along < 0:
        base.reverse()
    count = len(base)
    top = [_add(p, offset) for p in base]

    faces: List[Face] = []
    for i in range(1, count - 1):
        faces.append((0, i + 1, i))                         # base cap, facing back
        faces.append((count, count + i, count + i + 1))     # top cap, facing forward
    for i in range(count):
        j = (i + 1) % count
        faces.append((i, j, count + j))
        faces.append((i, count + j, count + i))

    return Mesh(base + top, faces)


def box(center: Vec3, size: Vec3) -> Mesh:
    """Axis-aligned rectangular prism with the given center and edge lengths."""
    cx, cy, cz = center
    sx, sy, sz = size
    x0 = cx - sx / 2.0
    y0, y1 = cy - sy / 2.0, cy + sy / 2.0
    z0, z1 = cz - sz / 2.0, cz + sz / 2.0
    profile = [(x0, y0, z0), (x0, y1, z0), (x0, y1, z1), (x0, y0, z1)]
    return extrude(profile, (sx, 0.0, 0.0))


def half_cylinder(center: Vec3, radius: float, length: float,
                  segments: int = SEMICIRCLE_SEGMENTS) -> Mesh:
    """Half cylinder with its axis along x through ``center``.

    The flat diametral face lies in the plane ``z = center.z`` and spans
    ``center.y - radius`` to ``center.y + radius``; the curved face bulges
    toward +z. ``segments`` is the number of facets on the half circle.
    """
    if segments < 1:
        raise ValueError('half cylinder needs at least one segment')
    cx, cy, cz = center
    x0 = cx - length / 2.0
    profile = []
    for k in range(segments + 1):
        theta = math.pi * k / segments
        profile.append((x0, cy + radius * math.cos(theta), cz + radius * math.sin(theta)))
    return extrude(profile, (length, 0.0, 0.0))


def triangular_prism(center: Vec3, base: float, altitude: float, length: float) -> Mesh:
    """Prism along x whose cross-section is an isosceles triangle.

    The triangle's base lies in the plane ``z = center.z`` from
    ``center.y - base/2`` to ``center.y + base/2``; the apex is at
    ``(center.y, center.z + altitude)``.
    """
    cx, cy, cz = center
    x0 = cx - length / 2.0
    profile = [
        (x0, cy - base / 2.0, cz),
        (x0, cy + base / 2.0, cz),
        (x0, cy, cz + altitude),
    ]
    return extrude(profile, (length, 0.0, 0.0))
