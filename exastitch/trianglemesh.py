"""Triangle meshes stored as a sequence of binary records.

Each record is: int32 vertex count, that many float32 xyz triples,
int32 triangle count, that many int32 index triples (little endian).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from itertools import chain
from os import PathLike
from typing import BinaryIO, List, Optional, Tuple, Union

from exastitch.common import Box3f

Vec3 = Tuple[float, float, float]
Vec3i = Tuple[int, int, int]

_COUNT = struct.Struct("<i")


class MeshFormatError(ValueError):
    """Raised when mesh data is truncated or references missing vertices."""


@dataclass
class TriangleMesh:
    """Indexed triangle mesh."""

    vertex: List[Vec3] = field(default_factory=list)
    index: List[Vec3i] = field(default_factory=list)

    def bounds(self) -> Box3f:
        """Box around every vertex referenced by a triangle."""
        box = Box3f()
        for tri in self.index:
            for i in tri:
                box.extend_point(self.vertex[i])
        return box

    def to_bytes(self) -> bytes:
        """Encode this mesh as one binary record."""
        verts = struct.pack(f"<{3 * len(self.vertex)}f", *chain.from_iterable(self.vertex))
        tris = struct.pack(f"<{3 * len(self.index)}i", *chain.from_iterable(self.index))
        return b"".join(
            (_COUNT.pack(len(self.vertex)), verts, _COUNT.pack(len(self.index)), tris)
        )


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise MeshFormatError(f"truncated triangle model while reading {what}")
    return data


def _triples(values):
    it = iter(values)
    return list(zip(it, it, it))


def load_one(stream: BinaryIO) -> Optional[TriangleMesh]:
    """Read the next mesh record from a binary stream, or None at end of data."""
    head = stream.read(_COUNT.size)
    if len(head) < _COUNT.size:
        return None
    (num_verts,) = _COUNT.unpack(head)
    if num_verts < 0:
        raise MeshFormatError("negative vertex count")
    raw_verts = _read_exact(stream, 12 * num_verts, "vertices")
    vertex = _triples(struct.unpack(f"<{3 * num_verts}f", raw_verts))

    (num_tris,) = _COUNT.unpack(_read_exact(stream, _COUNT.size, "triangle count"))
    if num_tris < 0:
        raise MeshFormatError("negative triangle count")
    raw_tris = _read_exact(stream, 12 * num_tris, "triangles")
    index = _triples(struct.unpack(f"<{3 * num_tris}i", raw_tris))

    for tri in index:
        if any(not 0 <= i < num_verts for i in tri):
            raise MeshFormatError("broken triangle model")

    return TriangleMesh(vertex=vertex, index=index)


def load(file_name: Union[str, PathLike]) -> List[TriangleMesh]:
    """Read every mesh record from a file."""
    with open(file_name, "rb") as stream:
        return list(iter(lambda: load_one(stream), None))