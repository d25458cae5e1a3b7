"""The state of a Blokus game, its rules and move generation."""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from ..protocol import Plugin
from ..xml_node import SCError, XmlNode
from .colors import CORNERS, Color, Player, Team
from .grid import BOARD_SIZE, Board
from .placement import Move, Piece, SetMove, SkipMove
from .shapes import PIECE_SHAPES, PIECE_SHAPES_BY_NAME, PieceShape
from .vectors import Vec2

SUM_MAX_SQUARES = 89

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_u32(raw: str) -> int:
    if _UNSIGNED.fullmatch(raw) is None or int(raw) > 0xFFFFFFFF:
        raise SCError(f"Could not parse unsigned integer {raw}")
    return int(raw)


def _shapes(node: XmlNode) -> set[PieceShape]:
    return {PieceShape.from_node(s) for s in node.children_by_name("shape")}


def _all_shapes() -> set[PieceShape]:
    return set(PIECE_SHAPES)


@dataclass
class GameState:
    """A snapshot of the game, holding what is needed to compute the next move."""

    turn: int
    round: int
    first: Player
    second: Player
    board: Board
    start_piece: PieceShape
    start_color: Color
    start_team: Team
    ordered_colors: list[Color]
    current_color_index: int
    last_move_mono: dict[Color, bool] = field(default_factory=dict)
    blue_shapes: set[PieceShape] = field(default_factory=_all_shapes)
    yellow_shapes: set[PieceShape] = field(default_factory=_all_shapes)
    red_shapes: set[PieceShape] = field(default_factory=_all_shapes)
    green_shapes: set[PieceShape] = field(default_factory=_all_shapes)

    @classmethod
    def initial(cls, start_piece: PieceShape) -> GameState:
        """A fresh game with blue and team one starting."""
        return cls(
            turn=0,
            round=1,
            first=Player(Team.ONE, "Alice"),
            second=Player(Team.TWO, "Bob"),
            board=Board(),
            start_piece=start_piece,
            start_color=Color.BLUE,
            start_team=Team.ONE,
            ordered_colors=[Color.BLUE, Color.YELLOW, Color.RED, Color.GREEN],
            current_color_index=0,
        )

    @classmethod
    def from_node(cls, node: XmlNode) -> GameState:
        return cls(
            turn=_parse_u32(node.attribute("turn")),
            round=_parse_u32(node.attribute("round")),
            first=Player.from_node(node.child_by_name("first")),
            second=Player.from_node(node.child_by_name("second")),
            board=Board.from_node(node.child_by_name("board")),
            start_piece=PieceShape.parse(node.attribute("startPiece")),
            start_color=Color.from_node(node.child_by_name("startColor")),
            start_team=Team.from_node(node.child_by_name("startTeam")),
            ordered_colors=[
                Color.from_node(c) for c in node.child_by_name("orderedColors").children_by_name("color")
            ],
            current_color_index=_parse_u32(node.attribute("currentColorIndex")),
            blue_shapes=_shapes(node.child_by_name("blueShapes")),
            yellow_shapes=_shapes(node.child_by_name("yellowShapes")),
            red_shapes=_shapes(node.child_by_name("redShapes")),
            green_shapes=_shapes(node.child_by_name("greenShapes")),
        )

    def current_color(self) -> Color:
        return self.ordered_colors[self.current_color_index]

    def current_team(self) -> Team:
        return self.current_color().team()

    def current_player(self) -> Player:
        team = self.current_team()
        if team is Team.ONE:
            return self.first
        if team is Team.TWO:
            return self.second
        raise ValueError("Cannot fetch the current player with the team being 'none'!")

    def player_color(self) -> Team:
        """The team whose turn it is."""
        return self.current_team()

    def undeployed_shapes_of_color(self, color: Color) -> set[PieceShape]:
        """The (mutable) set of shapes the color has not placed yet."""
        shapes = {
            Color.RED: self.red_shapes,
            Color.YELLOW: self.yellow_shapes,
            Color.GREEN: self.green_shapes,
            Color.BLUE: self.blue_shapes,
        }.get(color)
        if shapes is None:
            raise ValueError("Cannot fetch shapes of color 'none'!")
        return shapes

    @staticmethod
    def points_from_undeployed(undeployed: Iterable[PieceShape], mono_last: bool) -> int:
        """The points a color scores given its undeployed shapes."""
        remaining = list(undeployed)
        if not remaining:
            return SUM_MAX_SQUARES + 15 + (5 if mono_last else 0)
        return SUM_MAX_SQUARES - sum(len(list(s.coordinates())) for s in remaining)

    def is_first_move(self) -> bool:
        return len(self.undeployed_shapes_of_color(self.current_color())) == len(PIECE_SHAPES)

    def perform_move(self, game_move: Move) -> None:
        """Apply the move to this state, raising SCError if it is invalid."""
        self._validate_move_color(game_move)
        if isinstance(game_move, SetMove):
            self._perform_set_move(game_move.piece)
        elif isinstance(game_move, SkipMove):
            self._perform_skip_move()
        else:
            raise TypeError(f"Not a move: {game_move!r}")

    def after_move(self, game_move: Move) -> GameState:
        """A copy of this state with the move applied."""
        state = copy.deepcopy(self)
        state.perform_move(game_move)
        return state

    def try_advance(self, turns: int) -> None:
        if not self.ordered_colors:
            raise SCError("Game has already ended, cannot advance!")
        count = len(self.ordered_colors)
        self.current_color_index = (self.current_color_index + turns) % count
        self.round += turns // count
        self.turn += turns

    def _validate_move_color(self, game_move: Move) -> None:
        if game_move.color is not self.current_color():
            raise SCError(
                f"Move color {game_move.color} does not match game state color {self.current_color()}!"
            )

    def _validate_shape(self, shape: PieceShape, color: Color) -> None:
        if self.is_first_move():
            if shape != self.start_piece:
                raise SCError(f"{shape} is not the (requested) first shape")
        elif shape not in self.undeployed_shapes_of_color(color):
            raise SCError(f"Piece {shape} has already been placed before!")

    def _validate_set_move(self, piece: Piece) -> None:
        self._validate_shape(piece.kind, piece.color)
        coordinates = list(piece.coordinates())
        for c in coordinates:
            if not Board.is_in_bounds(c):
                raise SCError(f"Target position of the set move {c} is not in the board's bounds!")
            if self.board.is_obstructed(c):
                raise SCError(f"Target position of the set move {c} is obstructed!")
            if self.board.borders_on_color(c, piece.color):
                raise SCError(f"Target position of the set move {c} already borders on {piece.color}!")

        if self.is_first_move():
            if not any(Board.is_on_corner(c) for c in coordinates):
                raise SCError("The piece from the set move is not located in a corner!")
        elif not any(self.board.corners_on_color(c, piece.color) for c in coordinates):
            raise SCError(f"The piece {piece!r} shares no corner with another piece of same color!")

    def _is_valid_set(self, piece: Piece) -> bool:
        try:
            self._validate_set_move(piece)
        except SCError:
            return False
        return True

    def _perform_set_move(self, piece: Piece) -> None:
        self._validate_set_move(piece)
        self.board.place(piece)
        undeployed = self.undeployed_shapes_of_color(piece.color)
        undeployed.discard(piece.shape())
        if not undeployed:
            self.last_move_mono[piece.color] = piece.kind == PIECE_SHAPES_BY_NAME["MONO"]
        self.try_advance(1)

    def _perform_skip_move(self) -> None:
        if self.is_first_move():
            raise SCError("Cannot skip the first round!")
        self.try_advance(1)

    def _can_skip(self) -> bool:
        return bool(self.ordered_colors)

    def possible_moves(self) -> list[Move]:
        """All valid moves for the current color."""
        if self.is_first_move():
            return self.possible_first_moves()
        moves = self._possible_usual_set_moves()
        if self._can_skip():
            moves.append(SkipMove(self.current_color()))
        return moves

    def _possible_usual_set_moves(self) -> list[Move]:
        color = self.current_color()
        moves: list[Move] = []
        for kind in sorted(self.undeployed_shapes_of_color(color), key=lambda s: s.name):
            placable = Vec2.both(BOARD_SIZE - 1) - kind.bounding_box()
            for rotation, is_flipped in kind.transformations():
                for position in placable.area():
                    piece = Piece(kind, rotation, is_flipped, color, position)
                    if self._is_valid_set(piece):
                        moves.append(SetMove(piece))
        return moves

    def possible_first_moves(self) -> list[Move]:
        """All valid placements of the start piece into a corner."""
        kind = self.start_piece
        color = self.current_color()
        moves: list[Move] = []
        for rotation, is_flipped in kind.transformations():
            box = kind.transform(rotation, is_flipped).bounding_box()
            for corner in CORNERS:
                piece = Piece(kind, rotation, is_flipped, color, Board.align(box, corner))
                if self._is_valid_set(piece):
                    moves.append(SetMove(piece))
        return moves


class BlokusPlugin(Plugin):
    """The plugin for the "Blokus" game."""

    game_type: ClassVar[str] = "swc_2021_blokus"

    def parse_color(self, raw: str) -> Team:
        return Team.parse(raw)

    def player_from_node(self, node: XmlNode) -> Player:
        return Player.from_node(node)

    def state_from_node(self, node: XmlNode) -> GameState:
        return GameState.from_node(node)