import pytest

from sochaclient.blokus.colors import ROTATIONS, Rotation
from sochaclient.blokus.shapes import PIECE_SHAPES, PIECE_SHAPES_BY_NAME, PieceShape
from sochaclient.blokus.vectors import Vec2
from sochaclient.xml_node import SCError, XmlNode

SHAPE_NAMES = [
    "MONO", "DOMINO", "TRIO_L", "TRIO_I", "TETRO_O", "TETRO_T", "TETRO_I",
    "TETRO_L", "TETRO_Z", "PENTO_L", "PENTO_T", "PENTO_V", "PENTO_S", "PENTO_Z",
    "PENTO_I", "PENTO_P", "PENTO_W", "PENTO_U", "PENTO_R", "PENTO_X", "PENTO_Y",
]


def test_shape_catalogue():
    assert len(PIECE_SHAPES) == 21
    assert set(PIECE_SHAPES_BY_NAME) == set(SHAPE_NAMES)
    total = 0
    for name in SHAPE_NAMES:
        shape = PieceShape.parse(name)
        assert shape.name == name
        total += len(list(shape.coordinates()))
    assert total == 89


def test_parse_known_and_unknown():
    assert PieceShape.parse("PENTO_Y") == PIECE_SHAPES_BY_NAME["PENTO_Y"]
    assert str(PieceShape.parse("MONO")) == "MONO"
    with pytest.raises(SCError):
        PieceShape.parse("HEXO")


def test_from_node():
    node = XmlNode.builder("shape").content("TETRO_O").build()
    assert PieceShape.from_node(node) == PIECE_SHAPES_BY_NAME["TETRO_O"]


def test_mono_ascii_art():
    assert PIECE_SHAPES_BY_NAME["MONO"].ascii_art() == "#....\n" + ".....\n" * 4


@pytest.mark.parametrize("name", SHAPE_NAMES)
def test_contains_exactly_its_coordinates(name):
    shape = PieceShape.parse(name)
    cells = set(shape.coordinates())
    for y in range(5):
        for x in range(5):
            assert shape.contains(Vec2(x, y)) == (Vec2(x, y) in cells)
    assert shape.ascii_art().count("#") == len(cells)


def test_contains_out_of_box():
    shape = PieceShape.parse("PENTO_I")
    assert shape.contains(Vec2(0, 4)) is True
    assert shape.contains(Vec2(-1, 0)) is False
    assert shape.contains(Vec2(0, 5)) is False


@pytest.mark.parametrize("name", SHAPE_NAMES)
def test_rotation_identities(name):
    shape = PieceShape.parse(name)
    assert shape.rotate(Rotation.NONE) == shape
    assert shape.rotate(Rotation.RIGHT).rotate(Rotation.LEFT) == shape
    assert shape.rotate(Rotation.MIRROR).rotate(Rotation.MIRROR) == shape
    assert shape.flip().flip() == shape
    turned = shape
    for _ in range(4):
        turned = turned.rotate(Rotation.RIGHT)
    assert turned == shape


@pytest.mark.parametrize("name", SHAPE_NAMES)
def test_variants_preserve_size_and_are_normalized(name):
    shape = PieceShape.parse(name)
    size = len(list(shape.coordinates()))
    for variant in shape.variants():
        coords = list(variant.coordinates())
        assert variant.name == shape.name
        assert len(coords) == size
        assert min(c.x for c in coords) == 0
        assert min(c.y for c in coords) == 0
        box = variant.bounding_box()
        assert all(c.x <= box.x and c.y <= box.y for c in coords)


def test_transformations():
    combos = list(PIECE_SHAPES_BY_NAME["MONO"].transformations())
    assert len(combos) == 8
    assert len(set(combos)) == 8
    assert {r for r, _ in combos} == set(ROTATIONS)


def test_transform_matches_rotate_then_flip():
    shape = PieceShape.parse("PENTO_S")
    for rotation in ROTATIONS:
        assert shape.transform(rotation, False) == shape.rotate(rotation)
        assert shape.transform(rotation, True) == shape.rotate(rotation).flip()


def test_bounding_box_of_mono_is_zero():
    assert PIECE_SHAPES_BY_NAME["MONO"].bounding_box() == Vec2.zero()


def test_bounding_box_turns_with_shape():
    shape = PIECE_SHAPES_BY_NAME["TETRO_I"]
    box = shape.bounding_box()
    turned = shape.rotate(Rotation.RIGHT).bounding_box()
    assert turned == Vec2(box.y, box.x)


def test_pento_y_variants():
    arts = {v.ascii_art().strip() for v in PIECE_SHAPES_BY_NAME["PENTO_Y"].variants()}
    assert "#....\n##...\n#....\n#....\n....." in arts
    assert "####.\n..#..\n.....\n.....\n....." in arts
    assert "####.\n.#...\n.....\n.....\n....." in arts
    assert "#....\n#....\n##...\n#....\n....." in arts