"""Mesh containers produced by the STL loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Iterator, List, Tuple

from .points import ORIGIN, FixedPoint3, point_max, point_min


@dataclass(frozen=True)
class Face:
    """A triangle. Vertex order encodes the winding and is preserved."""

    v0: FixedPoint3
    v1: FixedPoint3
    v2: FixedPoint3

    @property
    def vertices(self) -> Tuple[FixedPoint3, FixedPoint3, FixedPoint3]:
        return (self.v0, self.v1, self.v2)

    def __iter__(self) -> Iterator[FixedPoint3]:
        return iter(self.vertices)


@dataclass
class Mesh:
    """An ordered list of faces loaded from a single model."""

    faces: List[Face] = field(default_factory=list)

    def add_face_triangle(self, v0: FixedPoint3, v1: FixedPoint3, v2: FixedPoint3) -> None:
        self.faces.append(Face(v0, v1, v2))

    def clear(self) -> None:
        self.faces = []

    @property
    def is_empty(self) -> bool:
        return not self.faces

    def __len__(self) -> int:
        return len(self.faces)

    def _vertices(self) -> Iterator[FixedPoint3]:
        for face in self.faces:
            yield from face

    def min_xyz(self) -> FixedPoint3:
        """Return the componentwise minimum over all vertices, or the origin."""

        if not self.faces:
            return ORIGIN
        return reduce(point_min, self._vertices())

    def max_xyz(self) -> FixedPoint3:
        """Return the componentwise maximum over all vertices, or the origin."""

        if not self.faces:
            return ORIGIN
        return reduce(point_max, self._vertices())


@dataclass
class MeshCollection:
    """All meshes loaded for one print, in load order."""

    meshes: List[Mesh] = field(default_factory=list)

    def append(self, mesh: Mesh) -> None:
        self.meshes.append(mesh)

    def __len__(self) -> int:
        return len(self.meshes)

    def __iter__(self) -> Iterator[Mesh]:
        return iter(self.meshes)

    def _populated(self) -> List[Mesh]:
        return [mesh for mesh in self.meshes if mesh.faces]

    def min_xyz(self) -> FixedPoint3:
        """Aggregate minimum over meshes that have faces.

        Empty meshes are skipped; with nothing to aggregate the origin is
        returned.
        """

        populated = self._populated()
        if not populated:
            return ORIGIN
        return reduce(point_min, (mesh.min_xyz() for mesh in populated))

    def max_xyz(self) -> FixedPoint3:
        populated = self._populated()
        if not populated:
            return ORIGIN
        return reduce(point_max, (mesh.max_xyz() for mesh in populated))
