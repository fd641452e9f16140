import logging
import numbers
import re

from wangtiles.errors import InvalidArgument

__all__ = [
    "NORTH",
    "EAST",
    "SOUTH",
    "WEST",
    "EDGES",
    "EDGE_NAMES",
    "ALL_CODES",
    "TileCode",
    "check_edge",
    "opposite",
    "code_from_edges",
    "edges_match",
    "compatible_codes",
    "parse_tileset",
]

log = logging.getLogger(__name__)

NORTH = 0
EAST = 1
SOUTH = 2
WEST = 3

EDGES = (NORTH, EAST, SOUTH, WEST)
EDGE_NAMES = {NORTH: "north", EAST: "east", SOUTH: "south", WEST: "west"}


def check_edge(edge):
    if type(edge) is bool or not isinstance(edge, numbers.Integral) or not 0 <= edge <= 3:
        raise InvalidArgument(f"edge out of range: {edge!r}")
    return int(edge)


def opposite(edge):
    edge = check_edge(edge)
    return edge + 2 if edge <= 1 else edge - 2


class TileCode(int):
    """
    A 4-bit tile code, one bit per edge carrying a connector.

    Bit 0 is north, bit 1 east, bit 2 south and bit 3 west, so the code of a
    tile with connectors on its north and west edges is 0b1001 == 9.
    """

    def __new__(cls, value):
        if type(value) is bool or not isinstance(value, numbers.Integral) or not 0 <= value <= 15:
            raise InvalidArgument(f"tile code out of range: {value!r}")
        return super().__new__(cls, int(value))

    def has(self, edge):
        return (self >> check_edge(edge)) & 1 != 0

    @property
    def north(self):
        return self.has(NORTH)

    @property
    def east(self):
        return self.has(EAST)

    @property
    def south(self):
        return self.has(SOUTH)

    @property
    def west(self):
        return self.has(WEST)

    def edges(self):
        return [edge for edge in EDGES if self.has(edge)]

    def __repr__(self):
        names = "|".join(EDGE_NAMES[edge][0].upper() for edge in self.edges())
        return f"TileCode({int(self)}{': ' + names if names else ''})"


ALL_CODES = tuple(TileCode(value) for value in range(16))


def code_from_edges(*edges):
    value = 0
    for edge in edges:
        value |= 1 << check_edge(edge)
    return TileCode(value)


def edges_match(code, edge, other):
    """
    True when `other` can sit against `code` on `code`'s `edge`.

    Only connector presence matters: the touching edges either both carry a
    connector or both don't.
    """
    return TileCode(code).has(edge) == TileCode(other).has(opposite(edge))


def compatible_codes(code, edge):
    code = TileCode(code)
    edge = check_edge(edge)
    res = [candidate for candidate in ALL_CODES if edges_match(code, edge, candidate)]
    log.debug("%r %s -> %s => %s", code, EDGE_NAMES[edge], EDGE_NAMES[opposite(edge)], res)
    return res


def parse_tileset(text):
    """Parse a tileset such as "0-3,5,15" into an ascending tuple of codes."""
    codes = set()
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        match = re.fullmatch(r"(\d+)(?:-(\d+))?", part)
        if match is None:
            raise InvalidArgument(f"bad tileset entry: {part!r}")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) is not None else start
        if end < start:
            raise InvalidArgument(f"bad tileset range: {part!r}")
        for value in range(start, end + 1):
            codes.add(TileCode(value))
    if not codes:
        raise InvalidArgument("tileset is empty")
    return tuple(sorted(codes))
