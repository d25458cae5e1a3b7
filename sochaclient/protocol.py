"""Data structures of the XML game protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from .xml_node import SCError, XmlNode


class Plugin(ABC):
    """Defines the game-specific types of one year's game.

    Game states returned by ``state_from_node`` expose a ``turn`` attribute
    and a ``player_color()`` method giving the color to move.
    """

    game_type: ClassVar[str] = ""

    @abstractmethod
    def parse_color(self, raw: str) -> Any:
        """Parse a player color, raising SCError if unknown."""

    @abstractmethod
    def player_from_node(self, node: XmlNode) -> Any:
        """Parse a player from its XML node."""

    @abstractmethod
    def state_from_node(self, node: XmlNode) -> Any:
        """Parse a game state from its XML node."""


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise SCError(f"Could not parse boolean {raw}")


class ScoreAggregation(Enum):
    """How scores are aggregated."""

    SUM = "SUM"
    AVERAGE = "AVERAGE"

    @classmethod
    def parse(cls, raw: str) -> ScoreAggregation:
        try:
            return cls(raw)
        except ValueError:
            raise SCError(f"Unknown score aggregation: {raw}") from None


class ScoreCause(Enum):
    """The cause of a game score."""

    REGULAR = "REGULAR"
    LEFT = "LEFT"
    RULE_VIOLATION = "RULE_VIOLATION"
    SOFT_TIMEOUT = "SOFT_TIMEOUT"
    HARD_TIMEOUT = "HARD_TIMEOUT"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: str) -> ScoreCause:
        try:
            return cls(raw)
        except ValueError:
            raise SCError(f"Unknown score cause: {raw}") from None


@dataclass(frozen=True)
class ScoreFragment:
    """A single score fragment."""

    name: str
    aggregation: ScoreAggregation
    relevant_for_ranking: bool

    @classmethod
    def from_node(cls, node: XmlNode) -> ScoreFragment:
        return cls(
            name=node.attribute("name"),
            aggregation=ScoreAggregation.parse(node.child_by_name("aggregation").content),
            relevant_for_ranking=_parse_bool(node.child_by_name("relevantForRanking").content),
        )


@dataclass(frozen=True)
class ScoreDefinition:
    """The definition of a score."""

    fragments: list[ScoreFragment] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: XmlNode) -> ScoreDefinition:
        return cls([ScoreFragment.from_node(f) for f in node.children_by_name("fragment")])


@dataclass(frozen=True)
class PlayerScore:
    """The score of a player."""

    cause: ScoreCause
    reason: str = ""

    @classmethod
    def from_node(cls, node: XmlNode) -> PlayerScore:
        return cls(
            cause=ScoreCause.parse(node.attribute("cause")),
            reason=node.attributes.get("reason", ""),
        )


@dataclass(frozen=True)
class GameResult:
    """The final result of a game."""

    definition: ScoreDefinition
    scores: list[PlayerScore]
    winners: list[Any]

    @classmethod
    def from_node(cls, node: XmlNode, plugin: Plugin) -> GameResult:
        return cls(
            definition=ScoreDefinition.from_node(node.child_by_name("definition")),
            scores=[PlayerScore.from_node(s) for s in node.children_by_name("score")],
            winners=[plugin.player_from_node(w) for w in node.children_by_name("winner")],
        )


@dataclass(frozen=True)
class Joined:
    """The client has joined a room."""

    room_id: str

    @classmethod
    def from_node(cls, node: XmlNode) -> Joined:
        return cls(node.attribute("roomId"))


@dataclass(frozen=True)
class Left:
    """The client has left a room."""

    room_id: str

    @classmethod
    def from_node(cls, node: XmlNode) -> Left:
        return cls(node.attribute("roomId"))


@dataclass(frozen=True)
class WelcomeMessage:
    """Tells the client its player color."""

    color: Any


@dataclass(frozen=True)
class Memento:
    """Carries an updated game state."""

    state: Any


@dataclass(frozen=True)
class MoveRequest:
    """Asks the client for a move."""


@dataclass(frozen=True)
class MoveData:
    """Carries a move sent by the client."""

    game_move: Any


@dataclass(frozen=True)
class ErrorMessage:
    """An error reported by the server."""

    message: str


_MOVE_REQUEST_CLASS = "sc.framework.plugins.protocol.MoveRequest"


def data_from_node(node: XmlNode, plugin: Plugin) -> Any:
    """Parse a <data> node into one of the data message types."""
    cls = node.attribute("class")
    if cls == "welcomeMessage":
        return WelcomeMessage(plugin.parse_color(node.attribute("color")))
    if cls == "memento":
        return Memento(plugin.state_from_node(node.child_by_name("state")))
    if cls == _MOVE_REQUEST_CLASS:
        return MoveRequest()
    if cls == "result":
        return GameResult.from_node(node, plugin)
    if cls == "error":
        return ErrorMessage(node.attribute("message"))
    raise SCError(f"Unrecognized data class: {cls}")


def data_to_node(data: Any) -> XmlNode:
    """Serialize a data message; only moves can be serialized."""
    if isinstance(data, MoveData):
        return data.game_move.to_node()
    raise SCError(f"{data!r} can currently not be serialized")


@dataclass(frozen=True)
class Room:
    """A message in a room together with its data."""

    room_id: str
    data: Any

    @classmethod
    def from_node(cls, node: XmlNode, plugin: Plugin) -> Room:
        return cls(
            room_id=node.attribute("roomId"),
            data=data_from_node(node.child_by_name("data"), plugin),
        )

    def to_node(self) -> XmlNode:
        return XmlNode.builder("room").attribute("roomId", self.room_id).child(data_to_node(self.data)).build()