"""Two-dimensional integer vectors used on the Blokus board."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ..xml_node import SCError, XmlNode

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(raw: str) -> int:
    if _INTEGER.fullmatch(raw) is None:
        raise SCError(f"Could not parse integer {raw}")
    return int(raw)


@dataclass(frozen=True)
class Vec2:
    """A vector in 2D space; x points right and y points down."""

    x: int
    y: int

    @staticmethod
    def both(value: int) -> Vec2:
        """A vector with both components set to the given value."""
        return Vec2(value, value)

    @staticmethod
    def zero() -> Vec2:
        """The origin."""
        return Vec2(0, 0)

    def turn_right(self) -> Vec2:
        """Rotate 90 degrees clockwise."""
        return Vec2(-self.y, self.x)

    def turn_left(self) -> Vec2:
        """Rotate 90 degrees counter-clockwise."""
        return Vec2(self.y, -self.x)

    def flip(self) -> Vec2:
        """Mirror along the y-axis."""
        return Vec2(-self.x, self.y)

    def min(self, other: Vec2) -> Vec2:
        """The component-wise minimum."""
        return Vec2(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Vec2) -> Vec2:
        """The component-wise maximum."""
        return Vec2(max(self.x, other.x), max(self.y, other.y))

    def area(self) -> Iterator[Vec2]:
        """All points from the origin up to this vector inclusive, row by row."""
        if self.x < 0 or self.y < 0:
            raise ValueError("Vectors with negative components cannot be iterated!")
        return (Vec2(x, y) for y in range(self.y + 1) for x in range(self.x + 1))

    @classmethod
    def from_node(cls, node: XmlNode) -> Vec2:
        return cls(_parse_int(node.attribute("x")), _parse_int(node.attribute("y")))

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __add__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        if not isinstance(other, Vec2):
            return NotImplemented
        return Vec2(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"