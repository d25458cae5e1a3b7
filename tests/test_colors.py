import pytest

from sochaclient.blokus.colors import (
    ROTATIONS,
    Color,
    Player,
    Rotation,
    Team,
)
from sochaclient.xml_node import SCError, XmlNode


@pytest.mark.parametrize("raw, expected", [
    ("BLUE", Color.BLUE),
    ("yellow", Color.YELLOW),
    ("Red", Color.RED),
    ("GREEN", Color.GREEN),
])
def test_color_parse(raw, expected):
    assert Color.parse(raw) is expected


@pytest.mark.parametrize("raw", ["NONE", "none", "PURPLE", ""])
def test_color_parse_rejects(raw):
    with pytest.raises(SCError):
        Color.parse(raw)


def test_color_str_roundtrip():
    for color in (Color.BLUE, Color.YELLOW, Color.RED, Color.GREEN):
        assert Color.parse(str(color)) is color
    assert str(Color.NONE) == "NONE"


@pytest.mark.parametrize("color, team", [
    (Color.RED, Team.ONE),
    (Color.BLUE, Team.ONE),
    (Color.YELLOW, Team.TWO),
    (Color.GREEN, Team.TWO),
    (Color.NONE, Team.NONE),
])
def test_color_team(color, team):
    assert color.team() is team


def test_color_from_node():
    node = XmlNode.builder("color").content("GREEN").build()
    assert Color.from_node(node) is Color.GREEN


def test_team_parse_and_str():
    for team in Team:
        assert Team.parse(str(team).lower()) is team
    with pytest.raises(SCError):
        Team.parse("THREE")


def test_team_opponent():
    assert Team.ONE.opponent() is Team.TWO
    assert Team.TWO.opponent() is Team.ONE
    assert Team.NONE.opponent() is Team.NONE


def test_team_from_node():
    node = XmlNode.builder("startTeam").content("TWO").build()
    assert Team.from_node(node) is Team.TWO


def test_rotation_int_roundtrip():
    for n in range(4):
        assert int(Rotation.from_int(n)) == n
    assert Rotation.from_int(0) is Rotation.NONE
    assert Rotation.from_int(2) is Rotation.MIRROR


def test_rotation_from_int_rejects():
    with pytest.raises(SCError):
        Rotation.from_int(4)


def test_rotation_parse_str_roundtrip():
    for rotation in Rotation:
        assert Rotation.parse(str(rotation)) is rotation
    assert Rotation.parse("left") is Rotation.LEFT
    assert str(Rotation.RIGHT) == "RIGHT"
    with pytest.raises(SCError):
        Rotation.parse("UP")


def test_rotations_order():
    expected = [
        Rotation.parse("NONE"),
        Rotation.parse("LEFT"),
        Rotation.parse("RIGHT"),
        Rotation.parse("MIRROR"),
    ]
    assert list(ROTATIONS) == expected


def test_player_from_node():
    node = (
        XmlNode.builder("first")
        .attribute("displayName", "Alice")
        .child(XmlNode.builder("color").content("ONE"))
        .build()
    )
    assert Player.from_node(node) == Player(Team.ONE, "Alice")


def test_player_from_node_missing_color():
    node = XmlNode.builder("first").attribute("displayName", "Alice").build()
    with pytest.raises(SCError):
        Player.from_node(node)