"""Resolving a motion word to the next room.

The travel table gives each room an ordered list of edges. The first edge
whose gate is the wildcard or the motion keyword wins. Destinations of 300
and up are sentinels: the real destination depends on the state of the
game, and is worked out by the handler registered for that sentinel.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from ..logging import get_logger
from .protocols import RandomSource
from .state import FISSURE, GRATE, NUGGET, SNAKE, GameState
from .world import World

logger = get_logger(__name__)

# Motion keywords with special meaning
FORWARD = 7
BACK = 8
OUT = 11
CRAWL = 17
IN = 19
UP = 29
DOWN = 30
LEFT = 36
RIGHT = 37
EAST = 43
WEST = 44
NORTH = 45
SOUTH = 46
XYZZY = 48
LOOK = 57
CAVE = 67
TURN = 68

TAKE_VERB = 1

# Destinations from here up are resolved by a handler
SENTINEL_BASE = 300

# Rooms below this number are above ground
CAVE_ENTRANCE = 8

MAX_LOOKS = 3

NO_WAY = 9
WHICH_WAY_FACING = 10
IN_OR_OUT = 11
CANT_APPLY = 12
DONT_UNDERSTAND = 13
NO_MORE_DETAIL = 15
NOTHING_HAPPENS = 42
WHERE_CAVE = 57
MORE_DETAIL = 58
REMOTE_THINGS = 59
WHICH_WAY = 80
CRAWLED_AROUND = 56


class MapError(Exception):
    """The travel table leads somewhere the game cannot handle."""


class Sentinel(IntEnum):
    FOREST_NORTH = 300
    GRATE_DOWN = 301
    GRATE_EXIT = 302
    PIT_DOWN = 303
    DOME_UP = 304
    FATAL_JUMP = 305
    FISSURE_JUMP = 306
    KING_NORTH = 307
    KING_SOUTH = 308
    KING_WEST = 309
    DEPRESSION = 310
    BEDQUILT_SOUTH = 311
    BEDQUILT_UP = 312
    CHEESE_NORTH = 313
    CHEESE_SOUTH = 314


@dataclass
class Journey:
    """Where a motion took the player and what was said on the way."""

    destination: int
    messages: list[int] = field(default_factory=list)
    game_over: bool = False


def _forest_north(state: GameState, rng: RandomSource) -> Journey:
    return Journey(5 if rng.ran(22) > 0.5 else 6)


def _grate_down(state: GameState, rng: RandomSource) -> Journey:
    return Journey(9 if state.prop(GRATE) else 23)


def _grate_exit(state: GameState, rng: RandomSource) -> Journey:
    return Journey(8 if state.prop(GRATE) else 9)


def _pit_down(state: GameState, rng: RandomSource) -> Journey:
    return Journey(20 if state.objects.is_carried(NUGGET) else 15)


def _dome_up(state: GameState, rng: RandomSource) -> Journey:
    return Journey(22 if state.objects.is_carried(NUGGET) else 14)


def _fatal_jump(state: GameState, rng: RandomSource) -> Journey:
    return Journey(state.current_room, game_over=True)


def _fissure_jump(state: GameState, rng: RandomSource) -> Journey:
    return Journey(27 if state.prop(FISSURE) else 31)


def _past_snake(destination: int) -> Callable[[GameState, RandomSource], Journey]:
    def handler(state: GameState, rng: RandomSource) -> Journey:
        return Journey(destination if state.prop(SNAKE) else 32)

    return handler


def _depression(state: GameState, rng: RandomSource) -> Journey:
    return Journey(8 if state.prop(GRATE) else 9)


def _crawled_around(room: int) -> Journey:
    return Journey(room, [CRAWLED_AROUND])


def _bedquilt_south(state: GameState, rng: RandomSource) -> Journey:
    if rng.ran(34) > 0.2:
        return _crawled_around(65)
    return Journey(68)


def _bedquilt_up(state: GameState, rng: RandomSource) -> Journey:
    if rng.ran(361) > 0.2:
        return _crawled_around(65)
    return Journey(70 if rng.ran(362) > 0.5 else 39)


def _cheese_north(state: GameState, rng: RandomSource) -> Journey:
    if rng.ran(371) > 0.4:
        return _crawled_around(66)
    return Journey(72 if rng.ran(372) > 0.25 else 71)


def _cheese_south(state: GameState, rng: RandomSource) -> Journey:
    if rng.ran(39) > 0.2:
        return _crawled_around(66)
    return Journey(77)


SENTINEL_HANDLERS: dict[Sentinel, Callable[[GameState, RandomSource], Journey]] = {
    Sentinel.FOREST_NORTH: _forest_north,
    Sentinel.GRATE_DOWN: _grate_down,
    Sentinel.GRATE_EXIT: _grate_exit,
    Sentinel.PIT_DOWN: _pit_down,
    Sentinel.DOME_UP: _dome_up,
    Sentinel.FATAL_JUMP: _fatal_jump,
    Sentinel.FISSURE_JUMP: _fissure_jump,
    Sentinel.KING_NORTH: _past_snake(28),
    Sentinel.KING_SOUTH: _past_snake(29),
    Sentinel.KING_WEST: _past_snake(30),
    Sentinel.DEPRESSION: _depression,
    Sentinel.BEDQUILT_SOUTH: _bedquilt_south,
    Sentinel.BEDQUILT_UP: _bedquilt_up,
    Sentinel.CHEESE_NORTH: _cheese_north,
    Sentinel.CHEESE_SOUTH: _cheese_south,
}


def cannot_go(keyword: int, verb: int) -> int:
    """Pick the complaint for a motion that leads nowhere from here."""
    reply = CANT_APPLY
    if EAST <= keyword <= SOUTH or keyword in (UP, DOWN):
        reply = NO_WAY
    if keyword in (FORWARD, BACK, LEFT, RIGHT, TURN):
        reply = WHICH_WAY_FACING
    if keyword in (OUT, IN):
        reply = IN_OR_OUT
    if verb == TAKE_VERB:
        reply = REMOTE_THINGS
    if keyword == XYZZY:
        reply = NOTHING_HAPPENS
    if keyword == CRAWL:
        reply = WHICH_WAY
    return reply


def resolve_sentinel(state: GameState, destination: int, rng: RandomSource) -> Journey:
    try:
        sentinel = Sentinel(destination)
    except ValueError:
        raise MapError(
            f"room {state.current_room} leads to unknown destination {destination}"
        ) from None
    journey = SENTINEL_HANDLERS[sentinel](state, rng)
    logger.debug(
        "special_travel",
        sentinel=sentinel.name,
        room=state.current_room,
        destination=journey.destination,
    )
    return journey


def travel(
    world: World, state: GameState, keyword: int, verb: int, rng: RandomSource
) -> Journey:
    """Follow a motion keyword out of the current room."""
    here = state.current_room
    room = world.room(here)

    if not room.edges:
        return Journey(here, [DONT_UNDERSTAND])

    if keyword == LOOK:
        messages = [NO_MORE_DETAIL] if state.look_count < MAX_LOOKS else []
        state.look_count += 1
        state.abbreviations[here] = 0
        return Journey(here, messages)

    if keyword == CAVE:
        return Journey(here, [WHERE_CAVE if here < CAVE_ENTRANCE else MORE_DETAIL])

    if keyword == BACK:
        destination, state.previous_room = state.previous_room, here
    else:
        state.previous_room = here
        edge = next((e for e in room.edges if e.matches(keyword)), None)
        if edge is None:
            return Journey(here, [cannot_go(keyword, verb)])
        destination = edge.destination

    if destination >= SENTINEL_BASE:
        return resolve_sentinel(state, destination, rng)
    return Journey(destination)
