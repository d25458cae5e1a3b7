"""An in-memory XML tree, a fluent builder and an incremental stream reader."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import IO, Any
from xml.parsers import expat
from xml.sax.saxutils import escape

log = logging.getLogger(__name__)


class SCError(Exception):
    """Raised for protocol, parsing and I/O failures of the client."""


def _attribute_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _escape_attribute(value: str) -> str:
    return escape(value, {'"': "&quot;"})


def _local_name(name: str) -> str:
    return name.rsplit(":", 1)[-1]


@dataclass
class XmlNode:
    """A deserialized XML element with its text, attributes and children."""

    name: str
    content: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[XmlNode] = field(default_factory=list)

    @staticmethod
    def builder(name: str = "") -> XmlNodeBuilder:
        """Start building a node with the given tag name."""
        return XmlNodeBuilder(name)

    def attribute(self, key: str) -> str:
        """Return the value of an attribute or raise SCError if it is missing."""
        try:
            return self.attributes[key]
        except KeyError:
            raise SCError(f"No attribute with key '{key}' found in <{self.name}>!") from None

    def child_by_name(self, name: str) -> XmlNode:
        """Return the first child with the given tag name."""
        for child in self.children_by_name(name):
            return child
        raise SCError(f"No <{name}> found in <{self.name}>!")

    def children_by_name(self, name: str) -> Iterator[XmlNode]:
        """Iterate over the children with the given tag name, in document order."""
        return (child for child in self.children if child.name == name)

    def to_xml(self, indent: bool = False) -> str:
        """Serialize the node, optionally indenting nested elements."""
        return self._render(indent, 0)

    def write_to(self, stream: IO[str]) -> None:
        """Write the compact serialization of the node to a text stream."""
        stream.write(self.to_xml(indent=False))

    def _render(self, indent: bool, depth: int) -> str:
        pad = "  " * depth if indent else ""
        attrs = "".join(f' {key}="{_escape_attribute(value)}"' for key, value in self.attributes.items())
        head = f"{pad}<{self.name}{attrs}"
        if not self.content and not self.children:
            return head + " />"
        out = head + ">" + escape(self.content)
        if self.children:
            sep = "\n" if indent else ""
            out += "".join(sep + child._render(indent, depth + 1) for child in self.children)
            out += sep + pad
        return out + f"</{self.name}>"

    def __str__(self) -> str:
        return self.to_xml(indent=True)


class XmlNodeBuilder:
    """Fluent construction of XmlNode trees."""

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._content = ""
        self._attributes: dict[str, str] = {}
        self._children: list[XmlNode] = []

    def named(self, name: str) -> XmlNodeBuilder:
        self._name = name
        return self

    def content(self, content: str) -> XmlNodeBuilder:
        self._content = content
        return self

    def attribute(self, key: str, value: Any) -> XmlNodeBuilder:
        self._attributes[key] = _attribute_text(value)
        return self

    def attributes(self, attributes: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> XmlNodeBuilder:
        pairs = attributes.items() if isinstance(attributes, Mapping) else attributes
        for key, value in pairs:
            self._attributes[key] = _attribute_text(value)
        return self

    def child(self, child: XmlNode | XmlNodeBuilder) -> XmlNodeBuilder:
        self._children.append(child.build() if isinstance(child, XmlNodeBuilder) else child)
        return self

    def children(self, children: Iterable[XmlNode | XmlNodeBuilder]) -> XmlNodeBuilder:
        for child in children:
            self.child(child)
        return self

    def build(self) -> XmlNode:
        return XmlNode(self._name, self._content, dict(self._attributes), list(self._children))


class XmlEventReader:
    """Reads XML elements incrementally from a (possibly never-ending) stream."""

    _CHUNK_SIZE = 4096

    def __init__(self, stream: IO[Any]) -> None:
        self._read = getattr(stream, "read1", None) or stream.read
        self._events: deque[tuple[Any, ...]] = deque()
        self._text: list[str] = []
        self._parser = expat.ParserCreate()
        self._parser.buffer_text = True
        self._parser.StartElementHandler = self._on_start
        self._parser.EndElementHandler = self._on_end
        self._parser.CharacterDataHandler = self._text.append

    def _flush_text(self) -> None:
        if self._text:
            text = "".join(self._text)
            self._text.clear()
            if text.strip():
                self._events.append(("text", text))

    def _on_start(self, name: str, attrs: dict[str, str]) -> None:
        self._flush_text()
        self._events.append(("start", _local_name(name), {_local_name(k): v for k, v in attrs.items()}))

    def _on_end(self, name: str) -> None:
        self._flush_text()
        self._events.append(("end", _local_name(name)))

    def _next_event(self) -> tuple[Any, ...]:
        while not self._events:
            try:
                chunk = self._read(self._CHUNK_SIZE)
            except OSError as e:
                raise SCError(f"Could not read from stream: {e}") from e
            if not chunk:
                raise SCError("XML stream ended unexpectedly")
            try:
                self._parser.Parse(chunk, False)
            except expat.ExpatError as e:
                raise SCError(f"Malformed XML: {e}") from e
        return self._events.popleft()

    def skip_to(self, name: str) -> None:
        """Discard events until an element with the given name has been opened."""
        while True:
            event = self._next_event()
            if event[0] == "start" and event[1] == name:
                return

    def read_node(self) -> XmlNode:
        """Read the next complete element from the stream."""
        stack: list[XmlNode] = []
        while True:
            kind, *rest = self._next_event()
            if kind == "start":
                name, attrs = rest
                stack.append(XmlNode(name, "", attrs, []))
            elif kind == "end":
                if not stack:
                    log.error("Found closing element </%s> without an opening element before", rest[0])
                    continue
                node = stack.pop()
                if not stack:
                    return node
                stack[-1].children.append(node)
            else:
                text = rest[0]
                if stack:
                    stack[-1].content += text
                else:
                    log.warning("Found characters %s outside of any node", text)