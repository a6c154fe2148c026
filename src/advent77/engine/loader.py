"""Parse the 1977 advdat data file into a World object.

The file is a series of sections. Each section starts with a line holding
its kind (1-6) and runs until a -1 line; a kind of 0 ends the file.

    1  long room descriptions      4  vocabulary
    2  short room descriptions     5  object descriptions
    3  travel table                6  messages
"""

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..logging import get_logger
from .reader import keyword
from .world import (
    RoomCondition,
    Room,
    TextBlock,
    TextLine,
    TravelEdge,
    Word,
    WordKind,
    World,
)

logger = get_logger(__name__)

# Table sizes of the 1977 program
MAX_TEXT_LINES = 999
MAX_TRAVEL_EDGES = 999
MAX_WORDS = 1000
MAX_GATES = 10

# Room conditions are compiled into the program, not stored in the file
LIT_ROOMS = range(1, 11)
FORCED_ROOMS = (16, 20, 21, 22, 23, 24, 25, 26, 31, 32, 79)

_RECORD = re.compile(r"^\s*(-?\d+)(.*)$")


class DataFormatError(Exception):
    """The data file is malformed."""


class TableOverflowError(DataFormatError):
    """The data file does not fit the program's tables."""


@dataclass
class _Tables:
    """Accumulators shared by the section parsers."""

    world: World
    long_text: dict[int, list[TextLine]] = field(default_factory=dict)
    short_text: dict[int, list[TextLine]] = field(default_factory=dict)
    messages: dict[int, list[TextLine]] = field(default_factory=dict)
    object_text: dict[tuple[int, int], list[TextLine]] = field(default_factory=dict)
    text_lines: int = 0
    edges: int = 0
    words: int = 0


def _ensure_room(rooms: dict[int, Room], n: int) -> Room:
    if n not in rooms:
        rooms[n] = Room(number=n)
    return rooms[n]


def _split(line: str) -> tuple[int, str]:
    """Split a record into its leading integer and the rest of the line."""
    match = _RECORD.match(line)
    if match is None:
        raise DataFormatError(f"expected a number at the start of {line!r}")
    return int(match.group(1)), match.group(2)


def _add_text_line(tables: _Tables, block: list[TextLine], text: str) -> None:
    tables.text_lines += 1
    if tables.text_lines > MAX_TEXT_LINES:
        raise TableOverflowError("TOO MANY LINES")
    block.append(TextLine.from_text(text.lstrip()))


def _parse_long_text(tables: _Tables, n: int, rest: str) -> None:
    _ensure_room(tables.world.rooms, n)
    _add_text_line(tables, tables.long_text.setdefault(n, []), rest)


def _parse_short_text(tables: _Tables, n: int, rest: str) -> None:
    _ensure_room(tables.world.rooms, n)
    _add_text_line(tables, tables.short_text.setdefault(n, []), rest)


def _parse_travel(tables: _Tables, n: int, rest: str) -> None:
    """Travel record: source destination gate gate ...

    A gate of 0, or the end of the record, ends the gate list.
    """
    try:
        numbers = [int(x) for x in rest.split()]
    except ValueError as exc:
        raise DataFormatError(f"bad travel record for room {n}: {rest!r}") from exc
    destination = numbers[0] if numbers else 0
    room = _ensure_room(tables.world.rooms, n)
    for gate in numbers[1 : MAX_GATES + 1]:
        if gate == 0:
            break
        tables.edges += 1
        if tables.edges > MAX_TRAVEL_EDGES:
            raise TableOverflowError("TOO MANY TRAVEL ENTRIES")
        room.edges.append(TravelEdge(destination=destination, gate=gate))


def _parse_vocabulary(tables: _Tables, n: int, rest: str) -> None:
    tables.words += 1
    if tables.words > MAX_WORDS:
        raise TableOverflowError("TOO MANY WORDS")
    kind_number = n // 1000
    if not 0 <= kind_number <= max(WordKind):
        raise DataFormatError(f"vocabulary id {n} is out of range")
    text = keyword(rest.strip())
    # The table is searched front to back, so the first spelling wins
    tables.world.vocabulary.setdefault(
        text, Word(text=text, kind=WordKind(kind_number), number=n % 1000)
    )


def _parse_object_text(tables: _Tables, n: int, rest: str) -> None:
    """Object descriptions.

    n < 100 describes object n with property 0, 100 <= n < 200 object n-100
    with a non-zero property, and n >= 200 object n-200 in either state.
    """
    if n >= 200:
        block = tables.object_text.setdefault((n - 200, 0), [])
        tables.object_text.setdefault((n - 200, 1), block)
    else:
        block = tables.object_text.setdefault((n % 100, n // 100), [])
    _add_text_line(tables, block, rest)


def _parse_message(tables: _Tables, n: int, rest: str) -> None:
    _add_text_line(tables, tables.messages.setdefault(n, []), rest)


_SECTION_PARSERS: dict[int, Callable[[_Tables, int, str], None]] = {
    1: _parse_long_text,
    2: _parse_short_text,
    3: _parse_travel,
    4: _parse_vocabulary,
    5: _parse_object_text,
    6: _parse_message,
}


def _apply_conditions(world: World) -> None:
    for n in LIT_ROOMS:
        _ensure_room(world.rooms, n).condition |= RoomCondition.LIGHT
    for n in FORCED_ROOMS:
        _ensure_room(world.rooms, n).condition |= RoomCondition.FORCED


def _freeze(tables: _Tables) -> World:
    world = tables.world
    for n, lines in tables.long_text.items():
        world.rooms[n].long_text = tuple(lines)
    for n, lines in tables.short_text.items():
        world.rooms[n].short_text = tuple(lines)
    world.messages = {n: tuple(lines) for n, lines in tables.messages.items()}
    # Both states of an object described by one record share a block
    blocks: dict[int, TextBlock] = {}
    for key, lines in tables.object_text.items():
        world.object_text[key] = blocks.setdefault(id(lines), tuple(lines))
    _apply_conditions(world)
    return world


def _records(lines: Iterator[str]) -> Iterator[str]:
    for line in lines:
        if line.strip():
            yield line.rstrip("\n")


def parse_world(lines: Iterable[str]) -> World:
    """Build a World from the lines of a data file."""
    tables = _Tables(world=World())
    records = _records(iter(lines))

    for line in records:
        kind, _ = _split(line)
        if kind == 0:
            return _freeze(tables)
        parser = _SECTION_PARSERS.get(kind)
        if parser is None:
            raise DataFormatError(f"unknown section kind {kind}")
        for record in records:
            n, rest = _split(record)
            if n == -1:
                break
            parser(tables, n, rest)
        else:
            raise DataFormatError(f"section {kind} is not terminated")

    raise DataFormatError("data file ended without a 0 record")


def load_world(data_path: Path) -> World:
    """Parse advent.dat and return a populated World.

    A file that cannot be opened or decoded is reported as a DataFormatError,
    the same as a malformed one.
    """
    try:
        with data_path.open(encoding="utf-8") as fh:
            world = parse_world(fh)
    except (OSError, UnicodeDecodeError) as exc:
        raise DataFormatError(f"cannot read {data_path}: {exc}") from exc
    logger.info(
        "world_loaded",
        rooms=len(world.rooms),
        words=len(world.vocabulary),
        messages=len(world.messages),
    )
    return world
