"""Colors, teams, corners, rotations and players of the Blokus game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..xml_node import SCError, XmlNode


class Team(Enum):
    """A player's team."""

    NONE = "NONE"
    ONE = "ONE"
    TWO = "TWO"

    @classmethod
    def parse(cls, raw: str) -> Team:
        try:
            return cls(raw.upper())
        except ValueError:
            raise SCError(f"Could not parse team {raw}") from None

    @classmethod
    def from_node(cls, node: XmlNode) -> Team:
        return cls.parse(node.content)

    def opponent(self) -> Team:
        return _OPPONENTS[self]

    def __str__(self) -> str:
        return self.value


_OPPONENTS = {Team.NONE: Team.NONE, Team.ONE: Team.TWO, Team.TWO: Team.ONE}


class Color(Enum):
    """A color in the game; NONE marks an empty field."""

    NONE = "NONE"
    BLUE = "BLUE"
    YELLOW = "YELLOW"
    RED = "RED"
    GREEN = "GREEN"

    @classmethod
    def parse(cls, raw: str) -> Color:
        upper = raw.upper()
        if upper == "NONE" or upper not in cls.__members__:
            raise SCError(f"Could not parse color {raw}")
        return cls(upper)

    @classmethod
    def from_node(cls, node: XmlNode) -> Color:
        return cls.parse(node.content)

    def team(self) -> Team:
        """The team the color plays for."""
        if self in (Color.RED, Color.BLUE):
            return Team.ONE
        if self in (Color.YELLOW, Color.GREEN):
            return Team.TWO
        return Team.NONE

    def __str__(self) -> str:
        return self.value


class Corner(Enum):
    """A corner of the board."""

    TOP_LEFT = "TOP_LEFT"
    TOP_RIGHT = "TOP_RIGHT"
    BOTTOM_LEFT = "BOTTOM_LEFT"
    BOTTOM_RIGHT = "BOTTOM_RIGHT"


CORNERS = (Corner.TOP_LEFT, Corner.TOP_RIGHT, Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT)


class Rotation(Enum):
    """How a piece shape is rotated."""

    NONE = 0
    RIGHT = 1
    MIRROR = 2
    LEFT = 3

    @classmethod
    def parse(cls, raw: str) -> Rotation:
        try:
            return cls[raw.upper()]
        except KeyError:
            raise SCError(f"Could not parse rotation {raw}") from None

    @classmethod
    def from_int(cls, n: int) -> Rotation:
        try:
            return cls(n)
        except ValueError:
            raise SCError(f"Could not parse rotation {n}") from None

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name


ROTATIONS = (Rotation.NONE, Rotation.LEFT, Rotation.RIGHT, Rotation.MIRROR)


@dataclass(frozen=True)
class Player:
    """Metadata about a player."""

    team: Team
    display_name: str

    @classmethod
    def from_node(cls, node: XmlNode) -> Player:
        return cls(
            team=Team.from_node(node.child_by_name("color")),
            display_name=node.attribute("displayName"),
        )