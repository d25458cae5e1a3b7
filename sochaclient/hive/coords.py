"""Coordinate systems for the hexagonal grid and helpers for lines and adjacency."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from typing import Union


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


class _CoordOps:
    """Component-wise arithmetic shared by all coordinate types."""

    def _parts(self) -> tuple[int, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))  # type: ignore[arg-type]

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a + b for a, b in zip(self._parts(), other._parts())))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a - b for a, b in zip(self._parts(), other._parts())))

    def __mul__(self, factor):
        if not isinstance(factor, int):
            return NotImplemented
        return type(self)(*(a * factor for a in self._parts()))

    def __floordiv__(self, divisor):
        """Divide every component, rounding toward zero."""
        if not isinstance(divisor, int):
            return NotImplemented
        return type(self)(*(_trunc_div(a, divisor) for a in self._parts()))

    def __str__(self) -> str:
        return "(" + ", ".join(str(p) for p in self._parts()) + ")"


@dataclass(frozen=True, order=True)
class AxialCoords(_CoordOps):
    """Axial coordinates on the hex grid."""

    x: int
    y: int

    def neighbors(self) -> tuple[AxialCoords, ...]:
        """All six neighbors, regardless of board boundaries."""
        return tuple(self + offset for offset in _NEIGHBOR_OFFSETS)

    def to_cube(self) -> CubeCoords:
        return CubeCoords(self.x, self.y, -(self.x + self.y))

    def to_doubled(self) -> DoubledCoords:
        return DoubledCoords(self.x - self.y, -(self.x + self.y))


_NEIGHBOR_OFFSETS = (
    AxialCoords(0, 1),
    AxialCoords(1, 0),
    AxialCoords(1, -1),
    AxialCoords(0, -1),
    AxialCoords(-1, 0),
    AxialCoords(-1, 1),
)


@dataclass(frozen=True, order=True)
class CubeCoords(_CoordOps):
    """Cube coordinates on the hex grid, as used by the protocol."""

    x: int
    y: int
    z: int

    @staticmethod
    def valid(x: int, y: int, z: int) -> CubeCoords | None:
        """Return the coordinates if they sum to zero, otherwise None."""
        return CubeCoords(x, y, z) if x + y + z == 0 else None

    def to_axial(self) -> AxialCoords:
        return AxialCoords(self.x, self.y)

    def to_doubled(self) -> DoubledCoords:
        return self.to_axial().to_doubled()

    def as_attributes(self) -> dict[str, str]:
        """The coordinates as XML attribute values."""
        return {"x": str(self.x), "y": str(self.y), "z": str(self.z)}


@dataclass(frozen=True, order=True)
class DoubledCoords(_CoordOps):
    """Offset coordinates with a doubled vertical step, handy for ASCII grids."""

    x: int
    y: int

    def to_axial(self) -> AxialCoords:
        return AxialCoords(
            _trunc_div(self.x - self.y, 2),
            _trunc_div(-(self.x + self.y), 2),
        )

    def to_cube(self) -> CubeCoords:
        return self.to_axial().to_cube()


Coords = Union[AxialCoords, CubeCoords, DoubledCoords]


def _as_cube(coords: Coords) -> CubeCoords:
    return coords if isinstance(coords, CubeCoords) else coords.to_cube()


def _as_axial(coords: Coords) -> AxialCoords:
    return coords if isinstance(coords, AxialCoords) else coords.to_axial()


def forms_line(a: Coords, b: Coords) -> bool:
    """Whether the two positions lie on a straight line of the grid."""
    ca, cb = _as_cube(a), _as_cube(b)
    return ca.x == cb.x or ca.y == cb.y or ca.z == cb.z


def line_between(a: Coords, b: Coords) -> Iterator[CubeCoords]:
    """Iterate over the cube coordinates strictly between two positions on a line."""
    if not forms_line(a, b):
        raise ValueError(f"{a} and {b} do not form a straight line")
    start, destination = _as_cube(a), _as_cube(b)
    diff = destination - start
    step = CubeCoords(_sign(diff.x), _sign(diff.y), _sign(diff.z))

    def walk() -> Iterator[CubeCoords]:
        current = start + step if start != destination else destination
        while current != destination:
            yield current
            current = current + step

    return walk()


def is_adjacent(a: Coords, b: Coords) -> bool:
    """Whether the two positions are neighbors."""
    return _as_axial(b) in _as_axial(a).neighbors()