"""STL export of slice solids and overlay meshes."""

from __future__ import annotations

import struct
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Union

from volumize.mesh import Mesh, Triangle

MeshLike = Union[Mesh, Iterable[Mesh]]

_HEADER_BYTES = 80
_COUNT = struct.Struct('<I')
_FACET = struct.Struct('<12fH')   # normal, three vertices, attribute byte count

_ASCII_FACET = (
    "  facet normal {n[0]:.6e} {n[1]:.6e} {n[2]:.6e}\n"
    "    outer loop\n"
    "      vertex {a[0]:.6e} {a[1]:.6e} {a[2]:.6e}\n"
    "      vertex {b[0]:.6e} {b[1]:.6e} {b[2]:.6e}\n"
    "      vertex {c[0]:.6e} {c[1]:.6e} {c[2]:.6e}\n"
    "    endloop\n"
    "  endfacet\n"
)


@contextmanager
def _output(target, mode: str) -> Iterator:
    """Yield a writable stream; paths are opened and closed here."""
    if hasattr(target, 'write'):
        yield target
        return
    encoding = None if 'b' in mode else 'ascii'
    with open(target, mode, encoding=encoding) as stream:
        yield stream


def _gather(meshes: MeshLike) -> List[Triangle]:
    if isinstance(meshes, Mesh):
        meshes = [meshes]
    return [tri for mesh in meshes for tri in mesh.triangles()]


def write_stl(meshes: MeshLike, path_or_file, *, binary: bool = True, name: str = 'volumize') -> int:
    """Write one mesh or several to STL and return the triangle count.

    ``path_or_file`` is a path or an already open stream (bytes for binary
    output, text for ASCII). Degenerate triangles are dropped.
    """
    triangles = _gather(meshes)
    if binary:
        with _output(path_or_file, 'wb') as stream:
            _emit_binary(stream, triangles, name)
    else:
        with _output(path_or_file, 'w') as stream:
            _emit_ascii(stream, triangles, name)
    return len(triangles)


def _emit_binary(stream, triangles: List[Triangle], name: str) -> None:
    label = name.encode('ascii', errors='replace')[:_HEADER_BYTES]
    stream.write(label.ljust(_HEADER_BYTES, b' '))
    stream.write(_COUNT.pack(len(triangles)))
    for tri in triangles:
        stream.write(_FACET.pack(*tri.normal, *tri.v0, *tri.v1, *tri.v2, 0))


def _emit_ascii(stream, triangles: List[Triangle], name: str) -> None:
    stream.write(f"solid {name}\n")
    for tri in triangles:
        stream.write(_ASCII_FACET.format(n=tri.normal, a=tri.v0, b=tri.v1, c=tri.v2))
    stream.write(f"endsolid {name}\n")
