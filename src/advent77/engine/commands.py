"""Verb handlers.

act(state, verb, obj, rng) applies a verb to an object; act_bare(state,
verb, rng) handles a verb typed on its own. Both mutate the state in place
and return a Reply naming the messages to show and what the turn loop
should do next.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from .protocols import RandomSource
from .state import (
    BIRD,
    CAGE,
    FISSURE,
    FOOD,
    GRATE,
    GRATE_BELOW,
    KEYS,
    KNIFE,
    LAMP,
    ROD,
    SNAKE,
    WATER,
    GameState,
)


class Verb(IntEnum):
    TAKE = 1
    DROP = 2
    DUMMY = 3
    OPEN = 4
    HOLD = 5
    LOCK = 6
    ON = 7
    OFF = 8
    STRIKE = 9
    CALM = 10
    GO = 11
    HIT = 12
    POUR = 13
    EAT = 14
    DRINK = 15
    RUB = 16


# What each verb says when it cannot be applied
DEFAULT_REPLY = {
    Verb.TAKE: 24,
    Verb.DROP: 29,
    Verb.DUMMY: 0,
    Verb.OPEN: 31,
    Verb.HOLD: 0,
    Verb.LOCK: 31,
    Verb.ON: 38,
    Verb.OFF: 38,
    Verb.STRIKE: 42,
    Verb.CALM: 42,
    Verb.GO: 43,
    Verb.HIT: 46,
    Verb.POUR: 77,
    Verb.EAT: 71,
    Verb.DRINK: 73,
    Verb.RUB: 75,
}

OK = 54

# Attacking a dwarf leaves the player to move on with this motion keyword
NULL_MOTION = 21

# Rooms on either side of the grate
GRATE_ROOMS = (8, 9)

KILL_CHANCE = 0.4


class Followup(Enum):
    PROMPT = "prompt"  # read a fresh command
    CLARIFY = "clarify"  # ask "<word> WHAT?", keep the pending verb and object
    RELIST = "relist"  # show the room's objects again
    TRAVEL = "travel"  # carry on as if a motion word had been typed
    MISUNDERSTOOD = "misunderstood"  # treat the input as an unknown word


@dataclass
class Reply:
    messages: list[int] = field(default_factory=list)
    followup: Followup = Followup.PROMPT
    keyword: int = 0


def _say(*messages: int) -> Reply:
    return Reply(list(messages))


def _default(verb: Verb) -> Reply:
    return _say(DEFAULT_REPLY[verb])


def _take(state: GameState, obj: int, rng: RandomSource) -> Reply:
    room = state.current_room
    objects = state.objects
    if obj == KNIFE:
        return _say(OK)
    if objects.where(obj) != room:
        return _default(Verb.TAKE)
    if objects.is_fixed(obj):
        return _say(25)  # YOU CAN'T BE SERIOUS!
    if obj == BIRD:
        if objects.is_carried(ROD):
            return _say(26)
        if not state.is_here(CAGE):
            return _say(27)
    objects.carry(obj)
    return _say(OK)


def _drop(state: GameState, obj: int, rng: RandomSource) -> Reply:
    room = state.current_room
    if obj == KNIFE:
        return _say(OK)
    if not state.objects.is_carried(obj):
        return _default(Verb.DROP)
    if obj == BIRD and room == 19 and state.prop(SNAKE) != 1:
        # The bird drives the snake away
        state.props[SNAKE] = 1
        reply = _say(30)
    else:
        reply = _say(OK)
    state.objects.put(obj, room)
    return reply


def _lock(state: GameState, obj: int, rng: RandomSource, verb: Verb) -> Reply:
    if not state.is_here(KEYS):
        return _default(verb)
    if obj == CAGE:
        return _say(32)
    if obj == KEYS:
        return _say(55)
    if obj != GRATE:
        return _say(33)

    locked = state.prop(GRATE) == 0
    if verb == Verb.OPEN:
        if not locked:
            return _say(36)
        state.props[GRATE] = state.props[GRATE_BELOW] = 1
        return _say(37)
    if locked:
        return _say(34)
    state.props[GRATE] = state.props[GRATE_BELOW] = 0
    return _say(35)


def _open(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return _lock(state, obj, rng, Verb.OPEN)


def _close(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return _lock(state, obj, rng, Verb.LOCK)


def _hold(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return _say(OK)


def _lamp_on(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if not state.is_here(LAMP):
        return _default(Verb.ON)
    state.props[LAMP] = 1
    state.dark = False
    return _say(39)


def _lamp_off(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if not state.is_here(LAMP):
        return _default(Verb.OFF)
    state.props[LAMP] = 0
    return _say(40)


def _strike(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if obj != FISSURE:
        return _default(Verb.STRIKE)
    # A crystal bridge now spans the fissure
    state.props[FISSURE] = 1
    return Reply(followup=Followup.RELIST)


def _hit(state: GameState, obj: int, rng: RandomSource) -> Reply:
    dwarf = next((d for d in state.dwarves if d.seen), None)
    if dwarf is not None:
        if rng.ran(5307) > KILL_CHANCE:
            reply = 48  # he dodges
        else:
            dwarf.reset()
            reply = 47
        return Reply([reply], Followup.TRAVEL, keyword=NULL_MOTION)

    if obj == 0:
        return Reply(followup=Followup.CLARIFY)
    if obj == SNAKE:
        return _default(Verb.HIT)
    if obj == BIRD:
        state.objects.destroy(BIRD)
        return _say(45, OK)
    return _say(44)


def _eat(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if obj != FOOD or not state.is_here(FOOD) or state.prop(FOOD) != 0:
        return _default(Verb.EAT)
    state.props[FOOD] = 1
    return _say(72)


def _drink(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if obj != WATER or not state.is_here(WATER) or state.prop(WATER) != 0:
        return _default(Verb.DRINK)
    state.props[WATER] = 1
    return _say(74)


def _pour(state: GameState, obj: int, rng: RandomSource) -> Reply:
    # Whatever was poured, the bottle ends up empty
    state.props[WATER] = 1
    if obj != WATER:
        return _say(78)
    return _default(Verb.POUR)


def _rub(state: GameState, obj: int, rng: RandomSource) -> Reply:
    if obj != LAMP:
        return _say(76)
    return _default(Verb.RUB)


def _dummy(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return Reply(followup=Followup.MISUNDERSTOOD)


def _calm(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return _default(Verb.CALM)


def _go(state: GameState, obj: int, rng: RandomSource) -> Reply:
    return _default(Verb.GO)


VERB_HANDLERS: dict[Verb, Callable[[GameState, int, RandomSource], Reply]] = {
    Verb.TAKE: _take,
    Verb.DROP: _drop,
    Verb.DUMMY: _dummy,
    Verb.OPEN: _open,
    Verb.HOLD: _hold,
    Verb.LOCK: _close,
    Verb.ON: _lamp_on,
    Verb.OFF: _lamp_off,
    Verb.STRIKE: _strike,
    Verb.CALM: _calm,
    Verb.GO: _go,
    Verb.HIT: _hit,
    Verb.POUR: _pour,
    Verb.EAT: _eat,
    Verb.DRINK: _drink,
    Verb.RUB: _rub,
}


def act(state: GameState, verb: int, obj: int, rng: RandomSource) -> Reply:
    """Apply a verb to an object."""
    return VERB_HANDLERS[Verb(verb)](state, obj, rng)


def _sole_object(state: GameState) -> int:
    """The object to take when TAKE is typed alone, or 0."""
    here = state.objects.at(state.current_room)
    if len(here) != 1 or state.dwarf_seen:
        return 0
    return here[0]


def act_bare(state: GameState, verb: int, rng: RandomSource) -> Reply:
    """Handle a verb given without an object."""
    verb = Verb(verb)
    if verb == Verb.TAKE:
        obj = _sole_object(state)
        if obj:
            state.obj = obj
            return act(state, verb, obj, rng)
    elif verb in (Verb.OPEN, Verb.LOCK):
        if state.current_room not in GRATE_ROOMS:
            return _say(28)  # nothing here with a lock
        state.obj = GRATE
        return act(state, verb, GRATE, rng)
    elif verb in (Verb.HOLD, Verb.ON, Verb.OFF, Verb.GO, Verb.HIT):
        return act(state, verb, 0, rng)
    return Reply(followup=Followup.CLARIFY)
