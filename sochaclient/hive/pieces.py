"""Piece types, player colors, pieces and players of the Hive game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..xml_node import SCError, XmlNode

ROUND_LIMIT = 30
BOARD_RADIUS = 6
FIELD_COUNT = 91


class PieceType(Enum):
    """A game piece type."""

    ANT = "ANT"
    BEE = "BEE"
    BEETLE = "BEETLE"
    GRASSHOPPER = "GRASSHOPPER"
    SPIDER = "SPIDER"

    @classmethod
    def parse(cls, raw: str) -> PieceType:
        try:
            return cls(raw.upper())
        except ValueError:
            raise SCError(f"Did not recognize piece type {raw}") from None

    @classmethod
    def from_char(cls, c: str) -> PieceType:
        """Parse the one-letter notation used in ASCII grids."""
        for piece_type, symbol in _PIECE_SYMBOLS.items():
            if c.upper()[:1] == symbol and len(c) == 1:
                return piece_type
        raise SCError(f"Did not recognize piece type {c}")

    def symbol(self) -> str:
        return _PIECE_SYMBOLS[self]

    def __str__(self) -> str:
        return self.value


_PIECE_SYMBOLS = {
    PieceType.ANT: "A",
    PieceType.BEE: "B",
    PieceType.BEETLE: "T",
    PieceType.GRASSHOPPER: "G",
    PieceType.SPIDER: "S",
}


class PlayerColor(Enum):
    """A player color in the game."""

    RED = "RED"
    BLUE = "BLUE"

    @classmethod
    def parse(cls, raw: str) -> PlayerColor:
        try:
            return cls(raw.upper())
        except ValueError:
            raise SCError(f"Did not recognize player color {raw}") from None

    @classmethod
    def from_char(cls, c: str) -> PlayerColor:
        """Parse the one-letter notation used in ASCII grids."""
        for color, symbol in _COLOR_SYMBOLS.items():
            if c.upper()[:1] == symbol and len(c) == 1:
                return color
        raise SCError(f"Did not recognize player color {c}")

    def symbol(self) -> str:
        return _COLOR_SYMBOLS[self]

    def opponent(self) -> PlayerColor:
        return PlayerColor.BLUE if self is PlayerColor.RED else PlayerColor.RED

    def __str__(self) -> str:
        return self.value


_COLOR_SYMBOLS = {PlayerColor.RED: "R", PlayerColor.BLUE: "B"}


INITIAL_PIECE_TYPES = (
    PieceType.BEE,
    PieceType.SPIDER,
    PieceType.SPIDER,
    PieceType.SPIDER,
    PieceType.GRASSHOPPER,
    PieceType.GRASSHOPPER,
    PieceType.BEETLE,
    PieceType.BEETLE,
    PieceType.ANT,
    PieceType.ANT,
    PieceType.ANT,
)


@dataclass(frozen=True)
class Piece:
    """A game piece."""

    owner: PlayerColor
    piece_type: PieceType

    @classmethod
    def from_node(cls, node: XmlNode) -> Piece:
        return cls(
            owner=PlayerColor.parse(node.attribute("owner")),
            piece_type=PieceType.parse(node.attribute("type")),
        )

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("piece")
            .attribute("owner", self.owner.value)
            .attribute("type", self.piece_type.value)
            .build()
        )


@dataclass(frozen=True)
class Player:
    """Metadata about a player."""

    color: PlayerColor
    display_name: str

    @classmethod
    def from_node(cls, node: XmlNode) -> Player:
        return cls(
            color=PlayerColor.parse(node.attribute("color")),
            display_name=node.attribute("displayName"),
        )