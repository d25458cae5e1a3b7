"""Fields of the Hive board and fields tied to a position."""

from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field as dc_field

from ..xml_node import SCError, XmlNode, XmlNodeBuilder
from .coords import AxialCoords, Coords, CubeCoords
from .pieces import Piece, PieceType, PlayerColor

_FIELD_SYNTAX = re.compile(r"([A-Z])([A-Z])")


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise SCError(f"Could not parse boolean {raw}")


@dataclass
class Field:
    """A field on the board: a stack of pieces and an obstruction flag."""

    piece_stack: list[Piece] = dc_field(default_factory=list)
    is_obstructed: bool = False

    def __post_init__(self) -> None:
        self.piece_stack = list(self.piece_stack)

    @classmethod
    def parse(cls, raw: str) -> Field:
        """Parse the two-letter notation: owner color, then piece type."""
        if not raw:
            return cls()
        match = _FIELD_SYNTAX.fullmatch(raw)
        if match is None:
            raise SCError(f"{raw} does not match field syntax ^([A-Z])([A-Z])$")
        owner = PlayerColor.from_char(match.group(1))
        piece_type = PieceType.from_char(match.group(2))
        return cls([Piece(owner, piece_type)], False)

    @classmethod
    def from_node(cls, node: XmlNode) -> Field:
        return cls(
            [Piece.from_node(p) for p in node.children_by_name("piece")],
            _parse_bool(node.attribute("isObstructed")),
        )

    def owner(self) -> PlayerColor | None:
        top = self.piece()
        return top.owner if top is not None else None

    def is_owned_by(self, color: PlayerColor) -> bool:
        return self.owner() is color

    def is_occupied(self) -> bool:
        return self.is_obstructed or self.has_pieces()

    def is_empty(self) -> bool:
        return not self.is_occupied()

    def piece(self) -> Piece | None:
        """The top-most piece, if any."""
        return self.piece_stack[-1] if self.piece_stack else None

    def has_pieces(self) -> bool:
        return bool(self.piece_stack)

    def push(self, piece: Piece) -> None:
        self.piece_stack.append(piece)

    def pop(self) -> Piece | None:
        """Remove and return the top-most piece, or None if there is none."""
        return self.piece_stack.pop() if self.piece_stack else None

    def __str__(self) -> str:
        top = self.piece()
        if top is None:
            return "[]"
        return top.owner.symbol() + top.piece_type.symbol()


@dataclass(frozen=True)
class PositionedField:
    """A field together with its position."""

    field: Field
    coords: Coords = AxialCoords(0, 0)

    def to_builder(self) -> XmlNodeBuilder:
        """An unnamed builder for the protocol representation of the field."""
        cube = self.coords if isinstance(self.coords, CubeCoords) else self.coords.to_cube()
        return (
            XmlNodeBuilder()
            .attribute("class", "field")
            .attributes(cube.as_attributes())
            .attribute("isObstructed", self.field.is_obstructed)
            .children(p.to_node() for p in self.field.piece_stack)
        )