"""The Blokus board: a 20x20 grid of colored fields."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..xml_node import SCError, XmlNode
from .colors import CORNERS, Color, Corner
from .placement import Piece
from .vectors import Vec2

BOARD_SIZE = 20

_INTEGER = re.compile(r"[+-]?[0-9]+")

_BORDER_OFFSETS = (Vec2(1, 0), Vec2(0, 1), Vec2(-1, 0), Vec2(0, -1))
# The diagonal (-1, -1) is not part of the corner check.
_CORNER_OFFSETS = (Vec2(1, 1), Vec2(-1, 1), Vec2(1, -1))


def _parse_int(raw: str) -> int:
    if _INTEGER.fullmatch(raw) is None:
        raise SCError(f"Could not parse integer {raw}")
    return int(raw)


@dataclass(frozen=True)
class Field:
    """A field on the board holding a color."""

    position: Vec2
    content: Color

    @classmethod
    def from_node(cls, node: XmlNode) -> Field:
        return cls(
            position=Vec2(_parse_int(node.attribute("x")), _parse_int(node.attribute("y"))),
            content=Color.parse(node.attribute("content")),
        )


class Board:
    """The game board, mapping positions to colors."""

    def __init__(self, fields: Iterable[Field] = ()) -> None:
        self._cells: dict[Vec2, Color] = {}
        for field in fields:
            self._cells.setdefault(field.position, field.content)

    @classmethod
    def from_node(cls, node: XmlNode) -> Board:
        return cls(Field.from_node(f) for f in node.children_by_name("field"))

    def __iter__(self) -> Iterator[Field]:
        return (Field(position, color) for position, color in self._cells.items())

    def count_obstructed(self) -> int:
        """The number of occupied fields."""
        return sum(1 for color in self._cells.values() if color is not Color.NONE)

    @staticmethod
    def is_in_bounds(coordinates: Vec2) -> bool:
        return 0 <= coordinates.x < BOARD_SIZE and 0 <= coordinates.y < BOARD_SIZE

    @staticmethod
    def corner_positions() -> list[Vec2]:
        """The positions of the board's corners, in the order of CORNERS."""
        return [Board.corner_position(corner) for corner in CORNERS]

    @staticmethod
    def corner_position(corner: Corner) -> Vec2:
        last = BOARD_SIZE - 1
        return {
            Corner.TOP_LEFT: Vec2(0, 0),
            Corner.BOTTOM_LEFT: Vec2(0, last),
            Corner.TOP_RIGHT: Vec2(last, 0),
            Corner.BOTTOM_RIGHT: Vec2(last, last),
        }[corner]

    @staticmethod
    def align(area: Vec2, corner: Corner) -> Vec2:
        """The top-left position that puts a box of the given extent into the corner."""
        position = Board.corner_position(corner)
        if corner is Corner.TOP_LEFT:
            return position
        if corner is Corner.TOP_RIGHT:
            return Vec2(position.x - area.x, position.y)
        if corner is Corner.BOTTOM_LEFT:
            return Vec2(position.x, position.y - area.y)
        return position - area

    @staticmethod
    def is_on_corner(position: Vec2) -> bool:
        return position in Board.corner_positions()

    def get(self, position: Vec2) -> Color:
        """The color at the position, NONE if the field is empty."""
        return self._cells.get(position, Color.NONE)

    def set(self, position: Vec2, color: Color) -> None:
        self._cells[position] = color

    def place(self, piece: Piece) -> None:
        """Place the piece without any further checks."""
        for position in piece.coordinates():
            self.set(position, piece.color)

    def is_obstructed(self, position: Vec2) -> bool:
        return self.get(position) is not Color.NONE

    def borders_on_color(self, position: Vec2, color: Color) -> bool:
        """Whether an edge neighbor holds the color."""
        return any(self.get(position + offset) is color for offset in _BORDER_OFFSETS)

    def corners_on_color(self, position: Vec2, color: Color) -> bool:
        """Whether a diagonal neighbor holds the color."""
        return any(self.get(position + offset) is color for offset in _CORNER_OFFSETS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({list(self)!r})"