"""The state of a Hive game, its move validation and move generation."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar, Union

from ..protocol import Plugin
from ..xml_node import SCError, XmlNode
from .board import Board
from .coords import AxialCoords, Coords, forms_line, is_adjacent, line_between
from .fields import Field, PositionedField
from .moves import DragMove, SetMove
from .pieces import INITIAL_PIECE_TYPES, Piece, PieceType, Player, PlayerColor

log = logging.getLogger(__name__)

Move = Union[SetMove, DragMove]

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _parse_u32(raw: str) -> int:
    if _UNSIGNED.fullmatch(raw) is None or int(raw) > 0xFFFFFFFF:
        raise SCError(f"Could not parse unsigned integer {raw}")
    return int(raw)


def _axial(coords: Coords) -> AxialCoords:
    return coords if isinstance(coords, AxialCoords) else coords.to_axial()


def _pieces(node: XmlNode) -> list[Piece]:
    return [Piece.from_node(p) for p in node.children_by_name("piece")]


@dataclass
class GameState:
    """A snapshot of the game at a specific turn."""

    turn: int
    start_player_color: PlayerColor
    current_player_color: PlayerColor
    board: Board
    red_player: Player
    blue_player: Player
    undeployed_red_pieces: list[Piece]
    undeployed_blue_pieces: list[Piece]

    @classmethod
    def from_node(cls, node: XmlNode) -> GameState:
        return cls(
            turn=_parse_u32(node.attribute("turn")),
            start_player_color=PlayerColor.parse(node.attribute("startPlayerColor")),
            current_player_color=PlayerColor.parse(node.attribute("currentPlayerColor")),
            red_player=Player.from_node(node.child_by_name("red")),
            blue_player=Player.from_node(node.child_by_name("blue")),
            board=Board.from_node(node.child_by_name("board")),
            undeployed_red_pieces=_pieces(node.child_by_name("undeployedRedPieces")),
            undeployed_blue_pieces=_pieces(node.child_by_name("undeployedBluePieces")),
        )

    def undeployed_pieces(self, color: PlayerColor) -> list[Piece]:
        return self.undeployed_red_pieces if color is PlayerColor.RED else self.undeployed_blue_pieces

    def player(self, color: PlayerColor) -> Player:
        return self.red_player if color is PlayerColor.RED else self.blue_player

    def round(self) -> int:
        """The current round, which is half the turn."""
        return self.turn // 2

    def player_color(self) -> PlayerColor:
        """The color whose turn it is."""
        return self.current_player_color

    # Validation

    @staticmethod
    def _validate_adjacent(start: AxialCoords, destination: AxialCoords) -> None:
        if not is_adjacent(start, destination):
            raise SCError("Coords are not adjacent to each other")

    def _validate_ant_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not self.board.connected_by_boundary_path(start, destination):
            raise SCError("Could not find path for ant")

    def _validate_bee_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        self._validate_adjacent(start, destination)
        if not self.board.can_move_between(start, destination):
            raise SCError(f"Cannot move between {start} and {destination}")

    def _validate_beetle_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        self._validate_adjacent(start, destination)
        along_swarm = any(f.has_pieces() for _, f in self.board.shared_neighbors(start, destination, None))
        target = self.board.field(destination)
        if not (along_swarm or (target is not None and target.has_pieces())):
            raise SCError("Beetle has to move along swarm")

    def _validate_grasshopper_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not forms_line(start, destination):
            raise SCError("Grasshopper can only move along straight lines")
        if is_adjacent(start, destination):
            raise SCError("Grasshopper must not move to a neighbor")
        for coords in line_between(start, destination):
            field = self.board.field(coords)
            if field is not None and field.is_empty():
                raise SCError("Grasshopper cannot move over empty fields")

    def _validate_spider_move(self, start: AxialCoords, destination: AxialCoords) -> None:
        if not self.board.bfs_reachable_in_3_steps(start, destination):
            raise SCError("No 3-step path found for Spider move")

    def _validate_set_move(self, color: PlayerColor, piece: Piece, destination_coords: Coords) -> None:
        destination = _axial(destination_coords)
        board = self.board
        field = board.field(destination)
        if field is None:
            raise SCError(f"Move destination is out of bounds: {destination}")
        if field.is_obstructed:
            raise SCError(f"Move destination is obstructed: {destination}")
        if not board.has_pieces():
            return
        opponent = color.opponent()
        if next(board.fields_owned_by(color), None) is None:
            if board.is_next_to(opponent, destination):
                return
            raise SCError("Piece has to be placed next to an opponent's piece")
        if self.round() == 3 and not board.has_placed_bee(color) and piece.piece_type is not PieceType.BEE:
            raise SCError("Bee has to be placed in the fourth round or earlier")
        if piece not in self.undeployed_pieces(color):
            raise SCError("Piece is not undeployed")
        if not board.is_next_to(color, destination):
            raise SCError("Piece is not placed next to an own piece")
        if board.is_next_to(opponent, destination):
            raise SCError("Piece must not be placed next to an opponent's piece")

    def _validate_drag_move(self, color: PlayerColor, start_coords: Coords, destination_coords: Coords) -> None:
        start, destination = _axial(start_coords), _axial(destination_coords)
        board = self.board
        if not board.has_placed_bee(color):
            raise SCError("Bee has to be placed before committing a drag move")
        if not board.contains_coords(start):
            raise SCError(f"Move start is out of bounds: {start}")
        if not board.contains_coords(destination):
            raise SCError(f"Move destination is out of bounds: {destination}")
        dragged = board.field(start).piece()
        if dragged is None:
            raise SCError("No piece to move")
        if dragged.owner is not color:
            raise SCError("Cannot move opponent's piece")
        if start == destination:
            raise SCError("Cannot move when start == destination")
        on_target = board.field(destination).piece()
        if on_target is not None and on_target.piece_type is PieceType.BEETLE:
            raise SCError("Only beetles can climb other pieces")
        without_piece = copy.deepcopy(board)
        without_piece.field(start).pop()
        if not without_piece.is_swarm_connected():
            raise SCError("Drag move would disconnect the swarm")

        validators = {
            PieceType.ANT: self._validate_ant_move,
            PieceType.BEE: self._validate_bee_move,
            PieceType.BEETLE: self._validate_beetle_move,
            PieceType.GRASSHOPPER: self._validate_grasshopper_move,
            PieceType.SPIDER: self._validate_spider_move,
        }
        validators[dragged.piece_type](start, destination)

    def validate_move(self, color: PlayerColor, game_move: Move) -> None:
        """Raise SCError if the move is not valid for the given color."""
        if isinstance(game_move, SetMove):
            self._validate_set_move(color, game_move.piece, game_move.destination.coords)
        elif isinstance(game_move, DragMove):
            self._validate_drag_move(color, game_move.start.coords, game_move.destination.coords)
        else:
            raise TypeError(f"Not a move: {game_move!r}")

    def _is_valid(self, color: PlayerColor, game_move: Move) -> bool:
        try:
            self.validate_move(color, game_move)
        except SCError:
            return False
        return True

    # Move generation

    def _possible_set_moves(self, color: PlayerColor) -> list[Move]:
        undeployed = self.undeployed_pieces(color)
        opponent = color.opponent()
        full = len(INITIAL_PIECE_TYPES)

        destination_coords: Iterable[AxialCoords]
        if len(undeployed) == full:
            if len(self.undeployed_pieces(opponent)) == full:
                log.debug("Finding SetMoves during first turn...")
                destination_coords = [c for c, _ in self.board.empty_fields()]
            else:
                log.debug("Finding SetMoves during second turn...")
                destination_coords = [
                    c
                    for owned, _ in self.board.fields_owned_by(opponent)
                    for c, _ in self.board.empty_neighbors(owned)
                ]
        else:
            destination_coords = list(self.board.possible_set_move_destinations(color))

        destinations = [
            PositionedField(Field(list(f.piece_stack), f.is_obstructed), c)
            for c in destination_coords
            if (f := self.board.field(c)) is not None
        ]

        if not self.board.has_placed_bee(color) and self.turn > 5:
            log.debug("Player has not placed bee yet, therefore placing it is the only valid move.")
            bee = Piece(color, PieceType.BEE)
            return [SetMove(bee, d) for d in destinations]
        return [SetMove(p, d) for d in destinations for p in undeployed]

    def _possible_drag_moves(self, color: PlayerColor) -> list[Move]:
        moves: list[Move] = []
        for start_coords, start_field in self.board.fields_owned_by(color):
            targets = list(self.board.swarm_boundary())
            top = start_field.piece()
            if top is not None and top.piece_type is PieceType.BEETLE:
                targets.extend(self.board.neighbors(start_coords))
            start = PositionedField(Field(list(start_field.piece_stack), start_field.is_obstructed), start_coords)
            for coords, field in targets:
                candidate = DragMove(start, PositionedField(Field(list(field.piece_stack), field.is_obstructed), coords))
                if self._is_valid(color, candidate):
                    moves.append(candidate)
        return moves

    def possible_moves(self, color: PlayerColor) -> list[Move]:
        """All set moves followed by all valid drag moves for the given color."""
        log.debug("Finding possible moves for color %s", color)
        return self._possible_set_moves(color) + self._possible_drag_moves(color)


class HivePlugin(Plugin):
    """The plugin for the "Hive" game."""

    game_type: ClassVar[str] = "swc_2020_hive"

    def parse_color(self, raw: str) -> PlayerColor:
        return PlayerColor.parse(raw)

    def player_from_node(self, node: XmlNode) -> Player:
        return Player.from_node(node)

    def state_from_node(self, node: XmlNode) -> GameState:
        return GameState.from_node(node)