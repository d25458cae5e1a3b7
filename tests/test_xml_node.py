import io

import pytest

from sochaclient.xml_node import SCError, XmlEventReader, XmlNode, XmlNodeBuilder


class _TrickleStream:
    """Hands out one byte per read call."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    def read(self, size: int) -> bytes:
        chunk, self._data = self._data[:1], self._data[1:]
        return chunk


def _reader(data: bytes) -> XmlEventReader:
    return XmlEventReader(io.BytesIO(data))


def test_xml_display():
    node = XmlNode.builder("a").attribute("b", "c").child(XmlNode.builder("d")).build()
    assert str(node) == '<a b="c">\n  <d />\n</a>'


def test_compact_serialization():
    node = XmlNode.builder("a").attribute("b", "c").child(XmlNode.builder("d")).build()
    assert node.to_xml() == '<a b="c"><d /></a>'


def test_write_to_text_stream():
    node = XmlNode.builder("room").attribute("roomId", "r1").content("hi").build()
    out = io.StringIO()
    node.write_to(out)
    assert out.getvalue() == node.to_xml(indent=False)
    assert out.getvalue().startswith("<room")


def test_bool_attributes_are_lowercase():
    node = XmlNode.builder("f").attribute("isObstructed", False).build()
    assert node.attribute("isObstructed") == "false"


def test_builder_named_and_attributes():
    node = (
        XmlNodeBuilder()
        .named("field")
        .attributes({"x": 1, "y": -1})
        .attributes([("z", 0)])
        .children([XmlNode("piece"), XmlNode.builder("piece").attribute("type", "BEE")])
        .build()
    )
    assert node.name == "field"
    assert node.attributes == {"x": "1", "y": "-1", "z": "0"}
    assert [c.attributes for c in node.children_by_name("piece")] == [{}, {"type": "BEE"}]


def test_missing_attribute_raises():
    node = XmlNode("a")
    with pytest.raises(SCError):
        node.attribute("b")


def test_missing_child_raises():
    node = XmlNode.builder("a").child(XmlNode("b")).build()
    assert node.child_by_name("b").name == "b"
    with pytest.raises(SCError):
        node.child_by_name("c")


def test_children_by_name_keeps_order():
    node = (
        XmlNode.builder("a")
        .child(XmlNode("x", "1"))
        .child(XmlNode("y", "2"))
        .child(XmlNode("x", "3"))
        .build()
    )
    assert [c.content for c in node.children_by_name("x")] == ["1", "3"]


def test_read_messages_after_protocol():
    reader = _reader(
        b'<protocol><joined roomId="r1"/>'
        b'<room roomId="r1"><data class="x">hi</data></room>'
    )
    reader.skip_to("protocol")
    joined = reader.read_node()
    assert joined.name == "joined"
    assert joined.attribute("roomId") == "r1"
    room = reader.read_node()
    assert room.child_by_name("data").content == "hi"
    assert room.child_by_name("data").attribute("class") == "x"


def test_skip_to_ignores_preceding_elements():
    reader = _reader(b"<root><other><x/></other><protocol><left roomId='q'/>")
    reader.skip_to("protocol")
    assert reader.read_node().attribute("roomId") == "q"


@pytest.mark.parametrize("indent", [False, True])
def test_round_trip(indent):
    node = (
        XmlNode.builder("room")
        .attribute("roomId", 'a<&>"b')
        .child(XmlNode.builder("data").attribute("class", "memento").child(XmlNode("state", "x & y")))
        .child(XmlNode("empty"))
        .build()
    )
    reader = _reader(node.to_xml(indent).encode())
    assert reader.read_node() == node


def test_reads_from_trickling_stream():
    node = XmlNode.builder("a").attribute("k", "v").child(XmlNode("b", "text")).build()
    reader = XmlEventReader(_TrickleStream(node.to_xml().encode()))
    assert reader.read_node() == node


def test_stray_closing_element_is_skipped():
    reader = _reader(b"<protocol><a/></protocol>")
    reader.skip_to("protocol")
    assert reader.read_node().name == "a"
    with pytest.raises(SCError):
        reader.read_node()


def test_end_of_stream_raises():
    reader = _reader(b"<protocol><a>")
    reader.skip_to("protocol")
    with pytest.raises(SCError):
        reader.read_node()


def test_malformed_xml_raises():
    reader = _reader(b"<protocol><a></b>")
    with pytest.raises(SCError):
        reader.skip_to("protocol")
        reader.read_node()