"""Keyword lookup and the replies to words the game does not know."""

from dataclasses import dataclass

from .protocols import RandomSource
from .state import BIRD, GRATE, ROD, SNAKE, GameState
from .world import Word, World

DONT_KNOW_WORD = 60
WHAT = 61
DONT_UNDERSTAND = 13

# Number of consecutive misses before the game tries to guess what was meant
PATIENCE = 3

ROD_HINT = 22
OK = 54


@dataclass(frozen=True)
class Question:
    """A yes/no question with the reply to each answer."""

    ask: int
    yes: int
    no: int


def lookup(world: World, code: str) -> Word | None:
    return world.vocabulary.get(code)


def misunderstood_reply(rng: RandomSource) -> int:
    reply = DONT_KNOW_WORD
    if rng.ran(30001) > 0.8:
        reply = WHAT
    if rng.ran(30002) > 0.8:
        reply = DONT_UNDERSTAND
    return reply


def clarifying_question(state: GameState) -> Question | None:
    """Guess at what a confused player is trying to do in a few places."""
    room = state.current_room
    objects = state.objects
    if room == 13 and objects.where(BIRD) == 13 and objects.is_carried(ROD):
        # Trying to catch the bird?
        return Question(ask=18, yes=19, no=OK)
    if room == 19 and state.prop(SNAKE) == 0 and not objects.is_carried(BIRD):
        # Trying to attack or avoid the snake?
        return Question(ask=20, yes=21, no=OK)
    if room == 8 and state.prop(GRATE) == 0:
        # Trying to get into the cave?
        return Question(ask=62, yes=63, no=OK)
    return None


def rod_hint(state: GameState) -> int:
    """Point out STRIKE when the player is fumbling with the rod."""
    if state.is_here(ROD) and state.obj == ROD:
        return ROD_HINT
    return 0
