"""Tests for motion resolution and the special travel rules."""

import pytest

from advent77.engine.state import (
    FISSURE,
    GRATE,
    NUGGET,
    SNAKE,
    GameState,
    new_game_state,
)
from advent77.engine.travel import (
    BACK,
    CAVE,
    CRAWL,
    DOWN,
    EAST,
    FORWARD,
    IN,
    LOOK,
    OUT,
    UP,
    XYZZY,
    MapError,
    Sentinel,
    cannot_go,
    resolve_sentinel,
    travel,
)
from advent77.engine.world import Room, TravelEdge, WordKind, World
from conftest import ScriptedRandom


@pytest.mark.parametrize(
    "keyword,verb,reply",
    [
        (EAST, 0, 9),
        (UP, 0, 9),
        (DOWN, 0, 9),
        (FORWARD, 0, 10),
        (BACK, 0, 10),
        (OUT, 0, 11),
        (IN, 0, 11),
        (EAST, 1, 59),
        (XYZZY, 1, 42),
        (XYZZY, 0, 42),
        (CRAWL, 0, 80),
        (3, 0, 12),
    ],
)
def test_cannot_go(keyword, verb, reply):
    assert cannot_go(keyword, verb) == reply


def test_first_matching_edge_wins(world: World, state: GameState, rng):
    journey = travel(world, state, IN, 0, rng)
    assert journey.destination == 3
    assert journey.messages == []
    assert state.previous_room == 1


def test_no_way(world: World, state: GameState, rng):
    journey = travel(world, state, UP, 0, rng)
    assert journey.destination == 1
    assert journey.messages == [9]


def test_no_way_anywhere_leaves_the_player_in_place(world: World, rng):
    """Every motion without a matching edge keeps the player where they are."""
    motions = {
        word.number
        for word in world.vocabulary.values()
        if word.kind is WordKind.MOTION
    } - {LOOK, CAVE, BACK}
    checked = 0
    for room in world.rooms.values():
        if not room.edges:
            continue
        for keyword in sorted(motions):
            if any(edge.matches(keyword) for edge in room.edges):
                continue
            state = new_game_state()
            state.current_room = room.number
            journey = travel(world, state, keyword, 0, rng)
            assert journey.destination == room.number, (room.number, keyword)
            assert journey.messages == [cannot_go(keyword, 0)]
            assert state.current_room == room.number
            checked += 1
    assert checked > 0


def test_magic_word(world: World, state: GameState, rng):
    state.current_room = 3
    assert travel(world, state, XYZZY, 0, rng).destination == 11
    state.current_room = 11
    assert travel(world, state, XYZZY, 0, rng).destination == 3


def test_back_returns_to_previous_room(world: World, state: GameState, rng):
    state.current_room = 3
    state.previous_room = 11
    journey = travel(world, state, BACK, 0, rng)
    assert journey.destination == 11
    assert state.previous_room == 3


def test_look_gives_up_after_three(world: World, state: GameState, rng):
    state.visit(1)
    replies = [travel(world, state, LOOK, 0, rng).messages for _ in range(4)]
    assert replies == [[15], [15], [15], []]
    assert state.abbreviations[1] == 0
    assert state.look_count == 4


def test_cave(world: World, state: GameState, rng):
    assert travel(world, state, CAVE, 0, rng).messages == [57]
    state.current_room = 15
    assert travel(world, state, CAVE, 0, rng).messages == [58]


def test_room_without_exits(world: World, state: GameState, rng):
    state.current_room = 26
    journey = travel(world, state, EAST, 0, rng)
    assert journey.destination == 26
    assert journey.messages == [13]


def test_grate_down(state: GameState, rng):
    assert resolve_sentinel(state, Sentinel.GRATE_DOWN, rng).destination == 23
    state.props[GRATE] = 1
    assert resolve_sentinel(state, Sentinel.GRATE_DOWN, rng).destination == 9


def test_pit_with_gold(state: GameState, rng):
    assert resolve_sentinel(state, Sentinel.PIT_DOWN, rng).destination == 15
    state.objects.carry(NUGGET)
    assert resolve_sentinel(state, Sentinel.PIT_DOWN, rng).destination == 20
    assert resolve_sentinel(state, Sentinel.DOME_UP, rng).destination == 22


def test_fissure_jump(state: GameState, rng):
    assert resolve_sentinel(state, Sentinel.FISSURE_JUMP, rng).destination == 31
    state.props[FISSURE] = 1
    assert resolve_sentinel(state, Sentinel.FISSURE_JUMP, rng).destination == 27


def test_fatal_jump(state: GameState, rng):
    journey = resolve_sentinel(state, Sentinel.FATAL_JUMP, rng)
    assert journey.game_over


def test_snake_guards_the_king(state: GameState, rng):
    for sentinel in (Sentinel.KING_NORTH, Sentinel.KING_SOUTH, Sentinel.KING_WEST):
        assert resolve_sentinel(state, sentinel, rng).destination == 32
    state.props[SNAKE] = 1
    assert resolve_sentinel(state, Sentinel.KING_NORTH, rng).destination == 28
    assert resolve_sentinel(state, Sentinel.KING_SOUTH, rng).destination == 29
    assert resolve_sentinel(state, Sentinel.KING_WEST, rng).destination == 30


def test_forest_north(state: GameState):
    rng = ScriptedRandom([0.7, 0.3])
    assert resolve_sentinel(state, Sentinel.FOREST_NORTH, rng).destination == 5
    assert resolve_sentinel(state, Sentinel.FOREST_NORTH, rng).destination == 6


def test_swiss_cheese_south(state: GameState):
    rng = ScriptedRandom([0.5, 0.1])
    journey = resolve_sentinel(state, Sentinel.CHEESE_SOUTH, rng)
    assert (journey.destination, journey.messages) == (66, [56])
    assert resolve_sentinel(state, Sentinel.CHEESE_SOUTH, rng).destination == 77
    assert rng.sites == [39, 39]


def test_swiss_cheese_north(state: GameState):
    rng = ScriptedRandom([0.1, 0.9, 0.1, 0.1])
    assert resolve_sentinel(state, Sentinel.CHEESE_NORTH, rng).destination == 72
    assert resolve_sentinel(state, Sentinel.CHEESE_NORTH, rng).destination == 71
    assert rng.sites == [371, 372, 371, 372]


def test_bedquilt(state: GameState):
    rng = ScriptedRandom([0.9, 0.1, 0.1, 0.9])
    journey = resolve_sentinel(state, Sentinel.BEDQUILT_SOUTH, rng)
    assert (journey.destination, journey.messages) == (65, [56])
    assert resolve_sentinel(state, Sentinel.BEDQUILT_SOUTH, rng).destination == 68
    assert resolve_sentinel(state, Sentinel.BEDQUILT_UP, rng).destination == 70
    assert rng.sites == [34, 34, 361, 362]


def test_unknown_destination_is_a_map_error(state: GameState, rng):
    room = Room(number=1, edges=[TravelEdge(destination=399, gate=1)])
    world = World(rooms={1: room})
    with pytest.raises(MapError, match="399"):
        travel(world, state, EAST, 0, rng)


def test_travel_edge_packing():
    edge = TravelEdge(destination=301, gate=30)
    assert TravelEdge.unpack(edge.packed) == edge
