"""The wandering dwarves.

Dwarves stay dormant until the player first stands in the Hall of Mists.
From then on each turn has a small chance of waking them: one throws an axe
and runs off. After that up to three dwarves walk a fixed patrol route,
staggered by slot, and follow the player once they have seen them. A dwarf
that was already in the player's room last turn throws a knife.
"""

from dataclasses import dataclass

from ..logging import get_logger
from .objects import NOWHERE
from .protocols import RandomSource
from .state import AXE, GameState
from .text import message
from .world import World

logger = get_logger(__name__)

TRIGGER_ROOM = 15
WAKE_CHANCE = 0.05
HIT_CHANCE = 0.1

# Slot i stands at patrol step 2i + stage - 8, counted from 1
PATROL = (36, 28, 19, 30, 62, 60, 41, 27, 17, 15, 19, 28, 36, 300, 300)

# Slots start moving once 2i + stage reaches this, and give up past LAST_STEP
FIRST_STEP = 8
LAST_STEP = 23

# Dwarves only follow the player inside the cave proper
FOLLOW_ABOVE = 14

BLOCKS_WAY = 2
AXE_THROWN = 3
ONE_DWARF = 4
ONE_KNIFE = 5
HE_GETS_YOU = 6
NONE_HIT = 7
IT_MISSES = 52


@dataclass(frozen=True)
class Encounter:
    """What the dwarves did this turn."""

    awakened: bool = False
    present: int = 0
    throwers: int = 0
    hits: int = 0

    @property
    def fatal(self) -> bool:
        return self.hits > 0


def patrol_step(step: int) -> int:
    if 1 <= step <= len(PATROL):
        return PATROL[step - 1]
    return NOWHERE


def blocks(state: GameState, destination: int) -> bool:
    """A dwarf that has seen the player guards the room it just left."""
    return any(
        dwarf.seen and dwarf.old_location == destination for dwarf in state.dwarves
    )


def _awaken(state: GameState) -> Encounter:
    state.dwarf_stage = 2
    for dwarf in state.dwarves:
        dwarf.reset()
    state.objects.put(AXE, state.current_room)
    logger.info("dwarves_awake", room=state.current_room)
    return Encounter(awakened=True)


def advance(state: GameState, rng: RandomSource) -> Encounter:
    """Move the dwarves for one turn and resolve any knife throwing."""
    room = state.current_room

    if state.dwarf_stage == 0:
        if room == TRIGGER_ROOM:
            state.dwarf_stage = 1
        return Encounter()

    if state.dwarf_stage == 1:
        if rng.ran(60) > WAKE_CHANCE:
            return Encounter()
        return _awaken(state)

    state.dwarf_stage += 1
    present = throwers = hits = 0
    for slot, dwarf in enumerate(state.dwarves, start=1):
        step = 2 * slot + state.dwarf_stage
        if step < FIRST_STEP:
            continue
        if step > LAST_STEP and not dwarf.seen:
            continue
        dwarf.old_location = dwarf.location
        if not (dwarf.seen and room > FOLLOW_ABOVE):
            dwarf.location = patrol_step(step - FIRST_STEP)
            dwarf.seen = False
            if room not in (dwarf.location, dwarf.old_location):
                continue
        dwarf.seen = True
        dwarf.location = room
        present += 1
        if dwarf.old_location != dwarf.location:
            continue
        throwers += 1
        if rng.ran(65) < HIT_CHANCE:
            hits += 1

    if hits:
        logger.info("player_killed", cause="knife", room=room, throwers=throwers)
    return Encounter(present=present, throwers=throwers, hits=hits)


def narrate(world: World, encounter: Encounter) -> str:
    """The text shown for an encounter, before the room description."""
    if encounter.awakened:
        return message(world, AXE_THROWN)
    if not encounter.present:
        return ""

    if encounter.present == 1:
        parts = [message(world, ONE_DWARF)]
    else:
        parts = [
            f"THERE ARE {encounter.present} THREATENING LITTLE DWARVES"
            " IN THE ROOM WITH YOU.\n"
        ]

    if encounter.throwers == 1:
        parts.append(message(world, ONE_KNIFE))
        parts.append(message(world, IT_MISSES + encounter.hits))
    elif encounter.throwers > 1:
        parts.append(f" {encounter.throwers} OF THEM THROW KNIVES AT YOU!\n")
        if encounter.hits == 0:
            parts.append(message(world, NONE_HIT))
        elif encounter.hits == 1:
            parts.append(message(world, HE_GETS_YOU))
        else:
            parts.append(f" {encounter.hits} OF THEM GET YOU.\n")
    return "".join(parts)
