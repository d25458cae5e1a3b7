"""The hexagonal Hive game board."""

from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Callable, Iterator, Mapping

from ..xml_node import SCError, XmlNode
from .coords import AxialCoords, Coords, CubeCoords, DoubledCoords
from .fields import Field
from .pieces import Piece, PieceType, PlayerColor

log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")

FieldEntry = tuple[AxialCoords, Field]


def _axial(coords: Coords) -> AxialCoords:
    return coords if isinstance(coords, AxialCoords) else coords.to_axial()


def _parse_int(raw: str) -> int:
    if _INTEGER.fullmatch(raw) is None:
        raise SCError(f"Could not parse integer {raw}")
    return int(raw)


class Board:
    """A hex grid of fields, addressed by axial coordinates."""

    def __init__(self, fields: Mapping[Coords, Field] | None = None) -> None:
        self._fields: dict[AxialCoords, Field] = {
            _axial(coords): field for coords, field in (fields or {}).items()
        }

    @classmethod
    def filling_radius(cls, radius: int, fields: Mapping[Coords, Field] | None = None) -> Board:
        """A hexagonal board holding the given fields, padded with empty ones up to the radius."""
        board = cls(fields)
        inner = radius - 1
        for y in range(-inner, inner + 1):
            for x in range(max(-(inner + y), -inner), min(inner - y, inner) + 1):
                board._fields.setdefault(AxialCoords(x, y), Field())
        log.debug("Created board with %d fields", len(board._fields))
        return board

    @classmethod
    def from_ascii_hex_grid(cls, grid: str) -> Board:
        """Parse a board from a plain-text hex grid.

        Every third line, starting with the third non-blank one, holds a row of
        fields separated by ``|``. Each field may hold a two-letter notation
        (owner color, then piece type); empty or invalid contents give empty
        fields. The origin of the result is the center of the grid.
        """
        lines = [line.strip() for line in grid.splitlines()]
        start = next((i for i, line in enumerate(lines) if line), len(lines))
        positioned: list[tuple[DoubledCoords, Field]] = []
        for y, line in enumerate(lines[start + 2 :: 3]):
            fragments = [frag for frag in line.split("|") if frag]
            for x, frag in enumerate(fragments):
                try:
                    field = Field.parse(frag.strip())
                except SCError as e:
                    log.debug("Could not parse %s: %s", frag, e)
                    field = Field()
                positioned.append((DoubledCoords(2 * x + (y + 1) % 2, y), field))
        center = DoubledCoords(
            max((c.x for c, _ in positioned), default=0),
            max((c.y for c, _ in positioned), default=0),
        ) // 2
        log.debug("Determined center at %s", center)
        return cls({(c - center).to_axial(): f for c, f in positioned})

    @classmethod
    def from_node(cls, node: XmlNode) -> Board:
        """Parse a board from its protocol representation."""
        fields: dict[AxialCoords, Field] = {}
        for group in node.children_by_name("fields"):
            for f in group.children_by_name("field"):
                coords = CubeCoords(
                    _parse_int(f.attribute("x")),
                    _parse_int(f.attribute("y")),
                    _parse_int(f.attribute("z")),
                ).to_axial()
                fields[coords] = Field.from_node(f)
        return cls.filling_radius(6, fields)

    def field(self, coords: Coords) -> Field | None:
        """The field at the given position, or None outside the board."""
        return self._fields.get(_axial(coords))

    def fields(self) -> Iterator[FieldEntry]:
        """All positions with their fields."""
        return iter(list(self._fields.items()))

    def is_occupied(self, coords: Coords) -> bool:
        """Whether the position is occupied; positions outside the board count as occupied."""
        field = self.field(coords)
        return True if field is None else field.is_occupied()

    def fields_owned_by(self, color: PlayerColor) -> Iterator[FieldEntry]:
        return ((c, f) for c, f in self.fields() if f.is_owned_by(color))

    def empty_fields(self) -> Iterator[FieldEntry]:
        return ((c, f) for c, f in self.fields() if f.is_empty())

    def occupied_fields(self) -> Iterator[FieldEntry]:
        return ((c, f) for c, f in self.fields() if f.is_occupied())

    def swarm_boundary(self) -> Iterator[FieldEntry]:
        """Empty fields next to an occupied field (possibly repeated)."""
        for coords, _ in self.occupied_fields():
            yield from self.empty_neighbors(coords)

    def contains_coords(self, coords: Coords) -> bool:
        return _axial(coords) in self._fields

    def has_pieces(self) -> bool:
        return any(f.has_pieces() for f in self._fields.values())

    def neighbors(self, coords: Coords) -> Iterator[FieldEntry]:
        """The neighboring positions that exist on the board."""
        return (
            (c, self._fields[c]) for c in _axial(coords).neighbors() if c in self._fields
        )

    def empty_neighbors(self, coords: Coords) -> Iterator[FieldEntry]:
        return ((c, f) for c, f in self.neighbors(coords) if f.is_empty())

    def has_placed_bee(self, color: PlayerColor) -> bool:
        bee = Piece(color, PieceType.BEE)
        return any(bee in f.piece_stack for f in self._fields.values())

    def is_next_to(self, color: PlayerColor, coords: Coords) -> bool:
        """Whether a neighbor of the position is owned by the color."""
        return any(f.is_owned_by(color) for _, f in self.neighbors(coords))

    def is_next_to_piece(self, coords: Coords) -> bool:
        return any(f.has_pieces() for _, f in self.neighbors(coords))

    def possible_set_move_destinations(self, color: PlayerColor) -> Iterator[AxialCoords]:
        """Empty fields next to the color's pieces that touch no opponent piece."""
        opponent = color.opponent()
        seen: set[AxialCoords] = set()
        for owned, _ in self.fields_owned_by(color):
            for coords, _ in self.empty_neighbors(owned):
                if coords in seen:
                    continue
                seen.add(coords)
                if not self.is_next_to(opponent, coords):
                    yield coords

    def _bfs_accessible(self, start: AxialCoords, condition: Callable[[AxialCoords, Field], bool]) -> bool:
        queue = deque([start])
        visited: set[AxialCoords] = set()
        while queue:
            coords = queue.popleft()
            if coords in visited:
                continue
            visited.add(coords)
            field = self.field(coords)
            if field is None:
                continue
            if condition(coords, field):
                return True
            queue.extend(
                c for c, _ in self.accessible_neighbors_except(start, coords) if c not in visited
            )
        return False

    def bfs_reachable_in_3_steps(self, start: Coords, destination: Coords) -> bool:
        """Whether the destination is reachable in exactly three accessible steps."""
        start, destination = _axial(start), _axial(destination)
        paths: deque[tuple[AxialCoords, ...]] = deque([(start,)])
        while paths:
            path = paths.popleft()
            following = [
                c for c, _ in self.accessible_neighbors_except(start, path[-1]) if c not in path
            ]
            if len(path) < 3:
                paths.extend(path + (c,) for c in following)
            elif destination in following:
                return True
        return False

    def shared_neighbors(
        self, a: Coords, b: Coords, exception: Coords | None = None
    ) -> list[FieldEntry]:
        """Common neighbors of two positions, leaving out fields holding exactly
        one piece unless they are at the exception."""
        except_at = None if exception is None else _axial(exception)
        b_coords = {c for c, _ in self.neighbors(b)}
        return [
            (c, f)
            for c, f in self.neighbors(a)
            if c in b_coords and (len(f.piece_stack) != 1 or c == except_at)
        ]

    def can_move_between_except(self, exception: Coords | None, a: Coords, b: Coords) -> bool:
        shared = self.shared_neighbors(a, b, exception)
        passable = len(shared) == 1 or any(f.is_empty() for _, f in shared)
        return passable and any(f.has_pieces() for _, f in shared)

    def can_move_between(self, a: Coords, b: Coords) -> bool:
        return self.can_move_between_except(None, a, b)

    def accessible_neighbors_except(self, exception: Coords | None, coords: Coords) -> Iterator[FieldEntry]:
        return (
            (c, f)
            for c, f in self.neighbors(coords)
            if f.is_empty() and self.can_move_between_except(exception, coords, c)
        )

    def accessible_neighbors(self, coords: Coords) -> Iterator[FieldEntry]:
        return self.accessible_neighbors_except(None, coords)

    def connected_by_boundary_path(self, start: Coords, destination: Coords) -> bool:
        """Whether a path of accessible fields leads from start to destination."""
        target = _axial(destination)
        return self._bfs_accessible(_axial(start), lambda c, _: c == target)

    def is_swarm_connected(self) -> bool:
        """Whether all fields holding pieces form one connected swarm."""
        unvisited = {c for c, f in self._fields.items() if f.has_pieces()}
        if not unvisited:
            return True
        stack = [next(iter(unvisited))]
        while stack:
            coords = stack.pop()
            if coords not in unvisited:
                continue
            unvisited.discard(coords)
            stack.extend(c for c, _ in self.neighbors(coords) if c in unvisited)
        return not unvisited

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({self._fields!r})"

    def __str__(self) -> str:
        if not self._fields:
            return ""
        xs = [c.x for c in self._fields]
        ys = [c.y for c in self._fields]
        out = []
        for y in range(min(ys), max(ys) + 1):
            row = []
            for x in range(min(xs), max(xs) + 1):
                field = self._fields.get(AxialCoords(-y, -x))
                row.append("00" if field is None else str(field))
            out.append("".join(row) + "\n")
        return "".join(out)