"""Integer point type used for all geometry after loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class FixedPoint3:
    """A position in micrometres."""

    x: int
    y: int
    z: int

    def __sub__(self, other: FixedPoint3) -> FixedPoint3:
        return FixedPoint3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y
        yield self.z

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)


ORIGIN = FixedPoint3(0, 0, 0)


def point_min(a: FixedPoint3, b: FixedPoint3) -> FixedPoint3:
    """Return the componentwise minimum of two points."""

    return FixedPoint3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))


def point_max(a: FixedPoint3, b: FixedPoint3) -> FixedPoint3:
    """Return the componentwise maximum of two points."""

    return FixedPoint3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))
