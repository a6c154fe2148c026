"""Mutable game state.

Everything the turn loop changes lives here. The World is never referenced,
so a state can be copied or inspected on its own.
"""

from dataclasses import dataclass, field

from .objects import NOWHERE, ObjectPlacement

# Starting room
START_ROOM = 1

# Object numbers
KEYS = 1
LAMP = 2
GRATE = 3
CAGE = 4
ROD = 5
STEPS = 6
BIRD = 7
GRATE_BELOW = 8
STEPS_BELOW = 9
NUGGET = 10
SNAKE = 11
FISSURE = 12
DIAMONDS = 13
SILVER = 14
JEWELS = 15
COINS = 16
DWARF = 17
KNIFE = 18
FOOD = 19
WATER = 20
AXE = 21
KNIFE2 = 22
CHEST = 23

OBJECT_COUNT = 23

# Starting room of each object; 0 means it starts out of play
INITIAL_ROOMS = {
    KEYS: 3,
    LAMP: 3,
    GRATE: 8,
    CAGE: 10,
    ROD: 11,
    STEPS: 14,
    BIRD: 13,
    GRATE_BELOW: 9,
    STEPS_BELOW: 15,
    NUGGET: 18,
    SNAKE: 19,
    FISSURE: 17,
    DIAMONDS: 27,
    SILVER: 28,
    JEWELS: 29,
    COINS: 30,
    FOOD: 3,
    WATER: 3,
}

FIXED_OBJECTS = frozenset({GRATE, STEPS, GRATE_BELOW, STEPS_BELOW, SNAKE, FISSURE})

DWARF_SLOTS = 3

# Abbreviated descriptions come back every fifth visit
ABBREVIATION_CYCLE = 5


@dataclass
class Dwarf:
    """One adversary slot."""

    location: int = NOWHERE
    old_location: int = NOWHERE
    seen: bool = False

    def reset(self) -> None:
        self.location = NOWHERE
        self.old_location = NOWHERE
        self.seen = False


def initial_placement() -> ObjectPlacement:
    """Objects in their starting rooms, chained in object order."""
    placement = ObjectPlacement(fixed=set(FIXED_OBJECTS))
    for obj in range(1, OBJECT_COUNT + 1):
        placement.place(obj, INITIAL_ROOMS.get(obj, NOWHERE))
    return placement


@dataclass
class GameState:
    """All mutable state of one run."""

    current_room: int = START_ROOM
    previous_room: int = START_ROOM

    objects: ObjectPlacement = field(default_factory=initial_placement)
    # obj → property; 0 is the starting state of every object
    props: dict[int, int] = field(
        default_factory=lambda: dict.fromkeys(range(1, OBJECT_COUNT + 1), 0)
    )
    # room → visit counter; short descriptions are used while it is non-zero
    abbreviations: dict[int, int] = field(default_factory=dict)

    # 0 dormant, 1 armed (player has reached the Hall of Mists), 2+ active
    dwarf_stage: int = 0
    dwarves: list[Dwarf] = field(
        default_factory=lambda: [Dwarf() for _ in range(DWARF_SLOTS)]
    )

    dark: bool = False
    west_count: int = 0
    look_count: int = 0
    misunderstood: int = 0

    # Pending command: verb and object carried between reads
    verb: int = 0
    obj: int = 0

    # Run statistics
    commands: int = 0
    deaths: int = 0
    restarts: int = 0

    def prop(self, obj: int) -> int:
        return self.props.get(obj, 0)

    def is_here(self, obj: int) -> bool:
        return self.objects.is_here(obj, self.current_room)

    def visit(self, room: int) -> None:
        count = self.abbreviations.get(room, 0) + 1
        self.abbreviations[room] = count % ABBREVIATION_CYCLE

    @property
    def dwarf_seen(self) -> bool:
        return any(dwarf.seen for dwarf in self.dwarves)


def new_game_state() -> GameState:
    """Create a fresh game state with objects in their starting positions."""
    return GameState()


def restart_game(state: GameState) -> None:
    """Put the world back for another attempt after a fatal accident.

    Object positions, visit counters and the per-game counters start over.
    Object properties and the dwarf slots carry over from the previous game.
    """
    state.objects = initial_placement()
    state.abbreviations.clear()
    state.current_room = START_ROOM
    state.dwarf_stage = 0
    state.west_count = 0
    state.look_count = 0
    state.dark = False
    state.verb = 0
    state.obj = 0
    state.restarts += 1
