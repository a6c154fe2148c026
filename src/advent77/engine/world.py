"""Immutable data structures for the Adventure game world.

These are loaded once from advent.dat at startup and only read afterwards.
"""

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag

# Width of one text cell and of one keyword code
CELL_WIDTH = 5

# A line holds 20 cells but only the first 18 are ever printed
CELLS_PER_LINE = 20
PRINTED_CELLS = 18

BLANK_CELL = " " * CELL_WIDTH

# Gate value that matches any keyword
WILDCARD = 1

# Packed travel destinations: dest * 1024 + gate
GATE_RADIX = 1024


class RoomCondition(IntFlag):
    """Per-room condition bits."""

    NONE = 0
    LIGHT = 1
    FORCED = 2  # travel on at once; no darkness check, no remarks


class WordKind(IntEnum):
    """Vocabulary category, taken from the thousands digit of the id."""

    MOTION = 0
    OBJECT = 1
    VERB = 2
    ADVICE = 3


@dataclass(frozen=True)
class TextLine:
    """One line of stored text as fixed-width cells."""

    cells: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "TextLine":
        cells = []
        while text and len(cells) < CELLS_PER_LINE:
            cells.append(text[:CELL_WIDTH].ljust(CELL_WIDTH))
            text = text[CELL_WIDTH:]
        return cls(tuple(cells))

    @property
    def width(self) -> int:
        """Number of cells up to the last non-blank printable one."""
        printable = self.cells[:PRINTED_CELLS]
        for n in range(len(printable), 0, -1):
            if printable[n - 1] != BLANK_CELL:
                return n
        return 0

    def render(self) -> str:
        return "".join(self.cells[: self.width])


TextBlock = tuple[TextLine, ...]


@dataclass(frozen=True)
class TravelEdge:
    """A travel table entry: keyword gate → destination."""

    destination: int
    gate: int

    @property
    def packed(self) -> int:
        return self.destination * GATE_RADIX + self.gate

    @classmethod
    def unpack(cls, code: int) -> "TravelEdge":
        destination, gate = divmod(abs(code), GATE_RADIX)
        return cls(destination=destination, gate=gate)

    def matches(self, keyword: int) -> bool:
        return self.gate == WILDCARD or self.gate == keyword


@dataclass
class Room:
    """A location in the game world."""

    number: int
    long_text: TextBlock | None = None
    short_text: TextBlock | None = None
    edges: list[TravelEdge] = field(default_factory=list)
    condition: RoomCondition = RoomCondition.NONE

    @property
    def is_light(self) -> bool:
        return bool(self.condition & RoomCondition.LIGHT)

    @property
    def is_forced(self) -> bool:
        return bool(self.condition & RoomCondition.FORCED)


@dataclass(frozen=True)
class Word:
    """A vocabulary word."""

    text: str
    kind: WordKind
    number: int


@dataclass
class World:
    """The complete immutable game world, loaded from advent.dat."""

    rooms: dict[int, Room] = field(default_factory=dict)
    vocabulary: dict[str, Word] = field(default_factory=dict)
    messages: dict[int, TextBlock] = field(default_factory=dict)
    # (object number, 0 or 1) → text shown when the object is in the room
    object_text: dict[tuple[int, int], TextBlock] = field(default_factory=dict)

    def room(self, number: int) -> Room:
        """Return the room, or an empty one for numbers the file never mentions."""
        return self.rooms.get(number) or Room(number=number)
