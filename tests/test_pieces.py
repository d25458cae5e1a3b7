import pytest

from sochaclient.hive.pieces import Piece, PieceType, Player, PlayerColor
from sochaclient.xml_node import SCError, XmlNode


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_piece_type_parse_round_trip(piece_type):
    assert PieceType.parse(piece_type.value) is piece_type
    assert PieceType.parse(piece_type.value.lower()) is piece_type


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_piece_type_symbol_round_trip(piece_type):
    assert PieceType.from_char(piece_type.symbol()) is piece_type
    assert PieceType.from_char(piece_type.symbol().lower()) is piece_type


@pytest.mark.parametrize(
    "symbol, name",
    [("A", "ANT"), ("B", "BEE"), ("T", "BEETLE"), ("G", "GRASSHOPPER"), ("S", "SPIDER")],
)
def test_piece_type_symbols(symbol, name):
    piece_type = PieceType.parse(name)
    assert piece_type.symbol() == symbol
    assert PieceType.from_char(symbol) is piece_type


def test_beetle_symbol():
    assert PieceType.from_char("T") is PieceType.BEETLE
    assert PieceType.BEETLE.symbol() == "T"


def test_piece_type_errors():
    with pytest.raises(SCError):
        PieceType.parse("queen")
    with pytest.raises(SCError):
        PieceType.from_char("X")


@pytest.mark.parametrize("color", list(PlayerColor))
def test_color_round_trips(color):
    assert PlayerColor.parse(color.value.lower()) is color
    assert PlayerColor.from_char(color.symbol()) is color
    assert color.opponent().opponent() is color
    assert color.opponent() is not color


def test_color_opponent():
    assert PlayerColor.RED.opponent() is PlayerColor.BLUE


def test_color_errors():
    with pytest.raises(SCError):
        PlayerColor.parse("green")
    with pytest.raises(SCError):
        PlayerColor.from_char("G")


def test_piece_to_node():
    node = Piece(PlayerColor.RED, PieceType.ANT).to_node()
    assert node.name == "piece"
    assert node.attributes == {"owner": "RED", "type": "ANT"}


@pytest.mark.parametrize("color", list(PlayerColor))
@pytest.mark.parametrize("piece_type", list(PieceType))
def test_piece_node_round_trip(color, piece_type):
    piece = Piece(color, piece_type)
    assert Piece.from_node(piece.to_node()) == piece


def test_piece_from_node_missing_attribute():
    with pytest.raises(SCError):
        Piece.from_node(XmlNode.builder("piece").attribute("owner", "RED").build())


def test_player_from_node():
    node = XmlNode.builder("red").attribute("color", "RED").attribute("displayName", "Alice").build()
    assert Player.from_node(node) == Player(PlayerColor.RED, "Alice")


def test_player_from_node_missing_name():
    with pytest.raises(SCError):
        Player.from_node(XmlNode.builder("red").attribute("color", "RED").build())