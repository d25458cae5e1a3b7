"""The 21 Blokus piece shapes, stored as bit sets on a 5x5 grid."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import reduce

from ..xml_node import SCError, XmlNode
from .colors import ROTATIONS, Rotation
from .vectors import Vec2

MAX_SIDE_LENGTH = 5


def _in_box(c: Vec2) -> bool:
    return 0 <= c.x < MAX_SIDE_LENGTH and 0 <= c.y < MAX_SIDE_LENGTH


def _index_of(c: Vec2) -> int:
    if not _in_box(c):
        raise ValueError(f"Coordinates {c} are outside of the {MAX_SIDE_LENGTH}x{MAX_SIDE_LENGTH} box")
    return c.y * MAX_SIDE_LENGTH + c.x


def _bits_of(coordinates: Iterable[Vec2]) -> int:
    bits = 0
    for c in coordinates:
        bits |= 1 << _index_of(c)
    return bits


def _aligned(coordinates: list[Vec2]) -> list[Vec2]:
    """Shift the coordinates so that their minimum lies at the origin."""
    if not coordinates:
        return []
    low = reduce(Vec2.min, coordinates)
    return [c - low for c in coordinates]


@dataclass(frozen=True)
class PieceShape:
    """A named shape whose normalized cells are stored as a 25-bit set."""

    name: str
    bits: int = 0

    @classmethod
    def _of(cls, name: str, coordinates: Iterable[Vec2]) -> PieceShape:
        return cls(name, _bits_of(coordinates))

    @classmethod
    def parse(cls, raw: str) -> PieceShape:
        try:
            return PIECE_SHAPES_BY_NAME[raw]
        except KeyError:
            raise SCError(f"Could not parse shape {raw}") from None

    @classmethod
    def from_node(cls, node: XmlNode) -> PieceShape:
        return cls.parse(node.content)

    def contains(self, coordinates: Vec2) -> bool:
        """Whether the shape covers the given normalized cell."""
        return _in_box(coordinates) and (self.bits >> _index_of(coordinates)) & 1 == 1

    def coordinates(self) -> Iterator[Vec2]:
        """The covered cells, origin at the top left, in row-major order."""
        return (
            Vec2(i % MAX_SIDE_LENGTH, i // MAX_SIDE_LENGTH)
            for i in range(MAX_SIDE_LENGTH * MAX_SIDE_LENGTH)
            if (self.bits >> i) & 1
        )

    def ascii_art(self) -> str:
        """The 5x5 grid with '#' for covered and '.' for free cells."""
        return "".join(
            "".join("#" if self.contains(Vec2(x, y)) else "." for x in range(MAX_SIDE_LENGTH)) + "\n"
            for y in range(MAX_SIDE_LENGTH)
        )

    def _mapped(self, transform: Callable[[Vec2], Vec2]) -> PieceShape:
        return PieceShape._of(self.name, _aligned([transform(c) for c in self.coordinates()]))

    def flip(self) -> PieceShape:
        """Mirror the shape along the y-axis."""
        return self._mapped(Vec2.flip)

    def rotate(self, rotation: Rotation) -> PieceShape:
        if rotation is Rotation.NONE:
            return self
        if rotation is Rotation.MIRROR:
            return self._mapped(Vec2.__neg__)
        if rotation is Rotation.RIGHT:
            return self._mapped(Vec2.turn_right)
        return self._mapped(Vec2.turn_left)

    def transform(self, rotation: Rotation, flip: bool) -> PieceShape:
        """Rotate, then flip if requested."""
        shape = self.rotate(rotation)
        return shape.flip() if flip else shape

    def transformations(self) -> Iterator[tuple[Rotation, bool]]:
        """All rotation/flip combinations."""
        return ((r, f) for r in ROTATIONS for f in (True, False))

    def variants(self) -> Iterator[PieceShape]:
        """The shape under every rotation/flip combination."""
        return (self.transform(r, f) for r, f in self.transformations())

    def bounding_box(self) -> Vec2:
        """The extent of the smallest rectangle containing the shape."""
        coords = list(self.coordinates())
        low = reduce(Vec2.min, coords, Vec2.zero())
        high = reduce(Vec2.max, coords, Vec2.zero())
        return high - low

    def __str__(self) -> str:
        return self.name


def _shape(name: str, *cells: tuple[int, int]) -> PieceShape:
    return PieceShape._of(name, (Vec2(x, y) for x, y in cells))


PIECE_SHAPES = (
    _shape("MONO", (0, 0)),
    _shape("DOMINO", (0, 0), (1, 0)),
    _shape("TRIO_L", (0, 0), (0, 1), (1, 1)),
    _shape("TRIO_I", (0, 0), (0, 1), (0, 2)),
    _shape("TETRO_O", (0, 0), (1, 0), (0, 1), (1, 1)),
    _shape("TETRO_T", (0, 0), (1, 0), (2, 0), (1, 1)),
    _shape("TETRO_I", (0, 0), (0, 1), (0, 2), (0, 3)),
    _shape("TETRO_L", (0, 0), (0, 1), (0, 2), (1, 2)),
    _shape("TETRO_Z", (0, 0), (1, 0), (1, 1), (2, 1)),
    _shape("PENTO_L", (0, 0), (0, 1), (0, 2), (0, 3), (1, 3)),
    _shape("PENTO_T", (0, 0), (1, 0), (2, 0), (1, 1), (1, 2)),
    _shape("PENTO_V", (0, 0), (0, 1), (0, 2), (1, 2), (2, 2)),
    _shape("PENTO_S", (1, 0), (2, 0), (3, 0), (0, 1), (1, 1)),
    _shape("PENTO_Z", (0, 0), (1, 0), (1, 1), (1, 2), (2, 2)),
    _shape("PENTO_I", (0, 0), (0, 1), (0, 2), (0, 3), (0, 4)),
    _shape("PENTO_P", (0, 0), (1, 0), (0, 1), (1, 1), (0, 2)),
    _shape("PENTO_W", (0, 0), (0, 1), (1, 1), (1, 2), (2, 2)),
    _shape("PENTO_U", (0, 0), (0, 1), (1, 1), (2, 1), (2, 0)),
    _shape("PENTO_R", (0, 1), (1, 1), (1, 2), (2, 1), (2, 0)),
    _shape("PENTO_X", (1, 0), (0, 1), (1, 1), (2, 1), (1, 2)),
    _shape("PENTO_Y", (0, 1), (1, 0), (1, 1), (1, 2), (1, 3)),
)

PIECE_SHAPES_BY_NAME = {shape.name: shape for shape in PIECE_SHAPES}