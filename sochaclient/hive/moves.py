"""Moves of the Hive game."""

from __future__ import annotations

from dataclasses import dataclass

from ..xml_node import XmlNode
from .fields import PositionedField
from .pieces import Piece


@dataclass(frozen=True)
class SetMove:
    """Places an undeployed piece on the board."""

    piece: Piece
    destination: PositionedField

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("data")
            .attribute("class", "setmove")
            .child(self.piece.to_node())
            .child(self.destination.to_builder().named("destination"))
            .build()
        )


@dataclass(frozen=True)
class DragMove:
    """Moves a piece already on the board."""

    start: PositionedField
    destination: PositionedField

    def to_node(self) -> XmlNode:
        return (
            XmlNode.builder("data")
            .attribute("class", "dragmove")
            .child(self.start.to_builder().named("start"))
            .child(self.destination.to_builder().named("destination"))
            .build()
        )