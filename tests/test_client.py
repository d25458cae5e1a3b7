import io
import socket
import threading
from dataclasses import dataclass

import pytest

from sochaclient.client import ClientDelegate, DebugMode, SCClient
from sochaclient.protocol import GameResult, Plugin, ScoreCause
from sochaclient.xml_node import SCError, XmlNode


@dataclass
class FakeState:
    turn: int
    color: str

    def player_color(self):
        return self.color


class FakeMove:
    def __init__(self, label):
        self.label = label

    def to_node(self):
        return XmlNode.builder("data").attribute("class", "move").attribute("label", self.label).build()


class FakePlugin(Plugin):
    game_type = "test_game"

    def parse_color(self, raw):
        if raw not in ("red", "blue"):
            raise SCError(f"Unknown color {raw}")
        return raw

    def player_from_node(self, node):
        return node.attribute("displayName")

    def state_from_node(self, node):
        return FakeState(int(node.attribute("turn")), node.attribute("color"))


class RecordingDelegate(ClientDelegate):
    def __init__(self):
        self.events = []

    def on_update_state(self, state):
        self.events.append(("state", state))

    def on_game_end(self, result):
        self.events.append(("end", result))

    def on_welcome_message(self, color):
        self.events.append(("welcome", color))

    def request_move(self, state, my_color):
        self.events.append(("request", state.turn, my_color))
        return FakeMove(f"{state.turn}-{my_color}")


def run(xml):
    delegate = RecordingDelegate()
    writer = io.StringIO()
    SCClient(delegate, FakePlugin()).run_game(io.BytesIO(xml.encode("utf-8")), writer)
    return delegate, writer.getvalue()


def test_full_game_flow_answers_move_request():
    delegate, output = run(
        '<protocol><joined roomId="r1"/>'
        '<room roomId="r1"><data class="welcomeMessage" color="red"/></room>'
        '<room roomId="r1"><data class="memento"><state turn="3" color="red"/></data></room>'
        '<room roomId="r1"><data class="sc.framework.plugins.protocol.MoveRequest"/></room>'
        "<close/>"
    )
    assert delegate.events == [
        ("welcome", "red"),
        ("state", FakeState(3, "red")),
        ("request", 3, "red"),
    ]
    assert output == '<room roomId="r1"><data class="move" label="3-red" /></room>'


def test_move_request_uses_latest_state():
    delegate, output = run(
        '<protocol><room roomId="a"><data class="memento"><state turn="1" color="red"/></data></room>'
        '<room roomId="a"><data class="memento"><state turn="2" color="blue"/></data></room>'
        '<room roomId="a"><data class="sc.framework.plugins.protocol.MoveRequest"/></room>'
        "<close/>"
    )
    assert ("request", 2, "blue") in delegate.events
    assert 'label="2-blue"' in output


def test_move_request_without_state_sends_nothing():
    delegate, output = run(
        '<protocol><room roomId="r"><data class="sc.framework.plugins.protocol.MoveRequest"/></room><close/>'
    )
    assert delegate.events == []
    assert output == ""


def test_unparsable_and_unknown_messages_are_skipped():
    delegate, output = run(
        '<protocol><room roomId="r"><data class="bogus"/></room>'
        '<room roomId="r"><data class="welcomeMessage" color="green"/></room>'
        '<unknown/><left roomId="r"/><joined/>'
        '<room roomId="r"><data class="error" message="oops"/></room>'
        '<room roomId="r"><data class="welcomeMessage" color="blue"/></room>'
        "<close/>"
    )
    assert delegate.events == [("welcome", "blue")]
    assert output == ""


def test_game_result_is_forwarded():
    delegate, _ = run(
        '<protocol><room roomId="r"><data class="result">'
        '<definition><fragment name="Siegpunkte"><aggregation>SUM</aggregation>'
        "<relevantForRanking>true</relevantForRanking></fragment></definition>"
        '<score cause="REGULAR" reason=""/><winner displayName="Alice"/>'
        "</data></room><close/>"
    )
    assert len(delegate.events) == 1
    kind, result = delegate.events[0]
    assert kind == "end"
    assert isinstance(result, GameResult)
    assert result.winners == ["Alice"]
    assert result.scores[0].cause is ScoreCause.REGULAR


def test_close_connection_stops_processing():
    delegate, _ = run(
        "<protocol><sc.protocol.responses.CloseConnection/>"
        '<room roomId="r"><data class="welcomeMessage" color="red"/></room>'
    )
    assert delegate.events == []


def test_stream_ending_without_close_raises():
    with pytest.raises(SCError):
        run('<protocol><joined roomId="x"/>')


def test_debug_mode_defaults():
    client = SCClient(RecordingDelegate(), FakePlugin())
    assert client.debug_mode == DebugMode(debug_reader=False, debug_writer=False)
    assert client.game_state is None


def _serve_once(server, received):
    conn, _ = server.accept()
    with conn:
        data = b""
        while b"/>" not in data:
            chunk = conn.recv(1024)
            if not chunk:
                break
            data += chunk
        received.append(data)
        conn.sendall(
            b'<protocol><room roomId="r"><data class="welcomeMessage" color="red"/></room><close/>'
        )


@pytest.mark.parametrize(
    "reservation, expected",
    [
        (None, b'<protocol><join gameType="test_game" />'),
        ("abc", b'<protocol><joinPrepared reservationCode="abc" />'),
    ],
)
def test_run_sends_join_and_handles_messages(reservation, expected):
    server = socket.create_server(("127.0.0.1", 0))
    port = server.getsockname()[1]
    received = []
    thread = threading.Thread(target=_serve_once, args=(server, received), daemon=True)
    thread.start()
    delegate = RecordingDelegate()
    try:
        SCClient(delegate, FakePlugin()).run("127.0.0.1", port, reservation)
        thread.join(5)
    finally:
        server.close()
    assert received == [expected]
    assert delegate.events == [("welcome", "red")]