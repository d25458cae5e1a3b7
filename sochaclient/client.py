"""The game client: connects to the server, dispatches protocol messages and asks a delegate for moves."""

from __future__ import annotations

import logging
import socket
import sys
from abc import ABC, abstractmethod
from contextlib import ExitStack
from dataclasses import dataclass
from typing import IO, Any
from xml.sax.saxutils import escape

from .protocol import (
    ErrorMessage,
    GameResult,
    Joined,
    Left,
    Memento,
    MoveData,
    MoveRequest,
    Plugin,
    Room,
    WelcomeMessage,
)
from .xml_node import SCError, XmlEventReader, XmlNode

log = logging.getLogger(__name__)

_CLOSE_NAMES = frozenset({"close", "sc.protocol.responses.CloseConnection"})


class ClientDelegate(ABC):
    """Implements a player's behaviour, usually a move selection strategy."""

    def on_update_state(self, state: Any) -> None:
        """Called whenever the game state updates."""

    def on_game_end(self, result: GameResult) -> None:
        """Called when the game ends."""

    def on_welcome_message(self, color: Any) -> None:
        """Called when the welcome message with the player's color arrives."""

    @abstractmethod
    def request_move(self, state: Any, my_color: Any) -> Any:
        """Return the move to play in the given state."""


@dataclass(frozen=True)
class DebugMode:
    """Swaps the reading and/or writing side of the connection for stdio."""

    debug_reader: bool = False
    debug_writer: bool = False


def _quote(value: str) -> str:
    return escape(value, {'"': "&quot;"})


class SCClient:
    """Handles the XML protocol, keeps the game state and invokes the delegate."""

    def __init__(self, delegate: ClientDelegate, plugin: Plugin, debug_mode: DebugMode | None = None) -> None:
        self.delegate = delegate
        self.plugin = plugin
        self.debug_mode = debug_mode or DebugMode()
        self.game_state: Any = None

    def run(self, host: str, port: int, reservation: str | None = None) -> None:
        """Connect via TCP, join a game and handle messages until the server closes the game."""
        address = f"{host}:{port}"
        try:
            sock = socket.create_connection((host, port))
        except OSError as e:
            raise SCError(f"Could not connect to {address}: {e}") from e

        with sock:
            log.info("Connected to %s", address)
            if reservation is not None:
                join_xml = f'<joinPrepared reservationCode="{_quote(reservation)}" />'
            else:
                join_xml = f'<join gameType="{_quote(self.plugin.game_type)}" />'
            log.info("Sending join message %s", join_xml)
            try:
                sock.sendall(("<protocol>" + join_xml).encode("utf-8"))
            except OSError as e:
                raise SCError(f"Could not send join message: {e}") from e

            with ExitStack() as stack:
                if self.debug_mode.debug_reader:
                    reader: IO[Any] = sys.stdin.buffer
                else:
                    reader = stack.enter_context(sock.makefile("rb"))
                if self.debug_mode.debug_writer:
                    writer: IO[str] = sys.stdout
                else:
                    writer = stack.enter_context(sock.makefile("w", encoding="utf-8"))
                self.run_game(reader, writer)

    def run_game(self, reader: IO[Any], writer: IO[str]) -> None:
        """Parse and handle game messages from the reader until a close message arrives."""
        xml_reader = XmlEventReader(reader)
        log.info("Waiting for initial <protocol>...")
        xml_reader.skip_to("protocol")

        while True:
            node = xml_reader.read_node()
            log.debug("Got XML node %s", node)

            if node.name == "room":
                self._handle_room(node, writer)
            elif node.name == "joined":
                try:
                    log.info("Joined room %s", Joined.from_node(node).room_id)
                except SCError as e:
                    log.error("Could not parse node as 'joined': %s", e)
            elif node.name == "left":
                try:
                    log.info("Left room %s", Left.from_node(node).room_id)
                except SCError as e:
                    log.error("Could not parse node as 'left': %s", e)
            elif node.name in _CLOSE_NAMES:
                log.info("Closing connection as requested by server...")
                break
            else:
                log.warning("Unrecognized message: <%s>", node.name)

    def _handle_room(self, node: XmlNode, writer: IO[str]) -> None:
        try:
            room = Room.from_node(node, self.plugin)
        except SCError as e:
            log.error("Could not parse node as room: %s", e)
            return

        data = room.data
        if isinstance(data, WelcomeMessage):
            log.info("Got welcome message with color: %r", data.color)
            self.delegate.on_welcome_message(data.color)
        elif isinstance(data, Memento):
            log.info("Got updated game state")
            self.delegate.on_update_state(data.state)
            self.game_state = data.state
        elif isinstance(data, MoveRequest):
            self._answer_move_request(room.room_id, writer)
        elif isinstance(data, GameResult):
            log.info("Got game result: %r", data)
            self.delegate.on_game_end(data)
        elif isinstance(data, ErrorMessage):
            log.warning("Got error from server: %s", data.message)
        else:
            log.warning("Could not handle room data: %r", data)

    def _answer_move_request(self, room_id: str, writer: IO[str]) -> None:
        state = self.game_state
        if state is None:
            log.error("Got move request, which cannot be fulfilled since no game state is present!")
            return
        color = state.player_color()
        log.info("Got move request @ turn: %s, color: %r", state.turn, color)

        new_move = self.delegate.request_move(state, color)
        move_node = Room(room_id, MoveData(new_move)).to_node()
        log.debug("Sending move %s", move_node)
        try:
            move_node.write_to(writer)
            writer.flush()
        except OSError as e:
            raise SCError(f"Could not send move: {e}") from e