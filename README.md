# sochaclient

A client framework for the Software Challenge game server, together with the
game logic for two of its games:

- **Hive** (`sochaclient.hive`): hexagonal coordinates (`coords`), pieces and
  players (`pieces`), fields (`fields`), moves (`moves`), the board (`board`)
  and the game state with move validation and move generation (`game_state`).
- **Blokus** (`sochaclient.blokus`): vectors (`vectors`), colors, teams,
  corners and rotations (`colors`), the 21 piece shapes with their rotations
  and flips (`shapes`), placed pieces and moves (`placement`), the 20×20 board
  (`grid`) and the game state with scoring and move generation (`state`).

The client speaks the server's XML protocol over TCP. It joins a game (or a
prepared reservation), keeps the latest game state, and asks your delegate for
a move whenever the server requests one. The standard library is all it needs.

## Writing a player

Subclass `ClientDelegate` and implement `request_move`. The other hooks
(`on_welcome_message`, `on_update_state`, `on_game_end`) are optional.

```python
from sochaclient.client import ClientDelegate, DebugMode, SCClient
from sochaclient.blokus.state import BlokusPlugin


class FirstMovePlayer(ClientDelegate):
    def on_welcome_message(self, color):
        print("Playing as", color)

    def on_update_state(self, state):
        print("Turn", state.turn)

    def on_game_end(self, result):
        print("Game over:", result.scores)

    def request_move(self, state, my_color):
        return state.possible_moves()[0]


client = SCClient(FirstMovePlayer(), BlokusPlugin(), DebugMode())
client.run("localhost", 13050, None)
```

`run` connects, sends `<protocol>` and a `<join gameType="...">` message, or
`<joinPrepared reservationCode="...">` when a reservation code is passed as the
third argument, and then handles messages until the server sends a close
message. Connection and protocol failures are raised as `SCError`.

For Hive, use `HivePlugin` from `sochaclient.hive.game_state`; its
`GameState.possible_moves(color)` lists the valid set and drag moves for a
colour, and `validate_move(color, move)` raises `SCError` for an invalid one.

`DebugMode(debug_reader=True)` makes the client read server messages from
standard input, and `DebugMode(debug_writer=True)` makes it write its moves to
standard output instead of the socket. The client still connects and sends
its join message to the server in either case.

## Working with the game logic directly

The game modules are usable without a server:

```python
from sochaclient.blokus.shapes import PieceShape
from sochaclient.blokus.state import GameState

state = GameState.initial(PieceShape.parse("PENTO_Y"))
first = state.possible_first_moves()[0]
state.perform_move(first)
print(state.current_color(), state.board.count_obstructed())
```

```python
from sochaclient.hive.board import Board
from sochaclient.hive.coords import AxialCoords

board = Board.filling_radius(6, {})
print(len(list(board.fields())))          # 91 fields
print(board.field(AxialCoords(0, 0)))     # [] for an empty field
```

`Board.from_ascii_hex_grid` builds a Hive board from a plain-text hex grid in
which fields are written as a colour letter followed by a piece letter
(for example `RB` for a red bee).

XML messages are represented by `XmlNode` (built with `XmlNode.builder`) and
read incrementally with `XmlEventReader`, both in `sochaclient.xml_node`.
Protocol messages (`Room`, `Joined`, `Left`, `GameResult`, `WelcomeMessage`,
`Memento`, `MoveRequest`, `ErrorMessage`, ...) live in `sochaclient.protocol`.

## What it does not do

- There is no command-line program; you start a player from your own Python
  code as shown above.
- No move-selection strategy is included; `request_move` is yours to write.
- The Hive game state validates and generates moves but cannot apply a move to
  itself; the next state comes from the server.
- Of the messages in a room, only moves can be serialized and sent back.
- A Blokus game state read from XML starts with an empty `last_move_mono`
  record.