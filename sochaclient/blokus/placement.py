"""Placed pieces and the moves of the Blokus game."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from ..xml_node import SCError, XmlNode
from .colors import Color, Rotation
from .shapes import PieceShape
from .vectors import Vec2


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise SCError(f"Could not parse boolean {raw}")


@dataclass(frozen=True)
class Piece:
    """A piece with color, position and transformed shape."""

    kind: PieceShape
    rotation: Rotation
    is_flipped: bool
    color: Color
    position: Vec2

    def shape(self) -> PieceShape:
        """The actual, transformed shape."""
        return self.kind.transform(self.rotation, self.is_flipped)

    def coordinates(self) -> Iterator[Vec2]:
        """The board cells the piece covers."""
        position = self.position
        return (c + position for c in self.shape().coordinates())

    @classmethod
    def from_node(cls, node: XmlNode) -> Piece:
        return cls(
            kind=PieceShape.parse(node.attribute("kind")),
            rotation=Rotation.parse(node.attribute("rotation")),
            is_flipped=_parse_bool(node.attribute("isFlipped")),
            color=Color.parse(node.attribute("color")),
            position=Vec2.from_node(node.child_by_name("position")),
        )

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("piece")
            .attribute("color", str(self.color))
            .attribute("kind", str(self.kind))
            .attribute("rotation", str(self.rotation))
            .attribute("isFlipped", self.is_flipped)
            .child(
                XmlNode.builder("position")
                .attribute("x", self.position.x)
                .attribute("y", self.position.y)
            )
            .build()
        )


@dataclass(frozen=True)
class SkipMove:
    """Skips the color's turn."""

    color: Color

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("data")
            .attribute("class", "sc.plugin2021.SkipMove")
            .child(XmlNode.builder("color").content(str(self.color)))
            .build()
        )


@dataclass(frozen=True)
class SetMove:
    """Places a not yet placed piece."""

    piece: Piece

    @property
    def color(self) -> Color:
        return self.piece.color

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("data")
            .attribute("class", "sc.plugin2021.SetMove")
            .child(self.piece.to_node())
            .build()
        )


Move = Union[SkipMove, SetMove]