"""The turn loop.

Adventure.run() drives the game as a small state machine. Each step method
does its work and returns the next Step:

    START    pause, welcome question, put the player on the road
    ARRIVE   enter a room: dwarf guard, dwarf turn, then DESCRIBE
    DESCRIBE show the room; forced rooms travel on at once
    SETTLE   darkness check, then LIST
    LIST     show the objects in the room
    COMMAND  forget any pending verb and object, then READ
    READ     read and act on one line of input
    HALT     stop; ``outcome`` says why

Fatal accidents are PAUSE prompts rather than exceptions: the player either
resumes, and play continues at a step that depends on the accident, or
terminates the whole run.
"""

from collections.abc import Callable
from enum import Enum

from ..logging import get_logger
from . import dwarves
from .commands import Followup, Reply, act, act_bare
from .protocols import RandomSource, Terminal
from .reader import BLANK, read_command
from .state import GRATE, LAMP, GameState, new_game_state, restart_game
from .text import describe_room, list_objects, message
from .travel import travel
from .vocabulary import (
    PATIENCE,
    Question,
    clarifying_question,
    lookup,
    misunderstood_reply,
    rod_hint,
)
from .world import WordKind, World

logger = get_logger(__name__)

RESUME = "G"
TERMINATE = "X"
NO_ANSWERS = ("NO   ", "N    ")

WELCOME = Question(ask=65, yes=1, no=0)

# Motion keywords that stand in for "the grate" outside and under it
GRATE_FROM_ABOVE = 49
GRATE_FROM_BELOW = 50
OUTSIDE_GRATE = (1, 4, 7)
UNDER_GRATE = range(10, 15)

HOLLOW_VOICE_ROOM = 33
WEST_HINT_AFTER = 10

BLOCKED = 2
HOLLOW_VOICE = 8
PITCH_BLACK = 16
WEST_HINT = 17
FELL_IN_PIT = 23
FEET_WET = 70

DARK_FALL_CHANCE = 0.25
HOLLOW_VOICE_CHANCE = 0.25


class Outcome(Enum):
    COMPLETED = "completed"  # input ran out
    TERMINATED = "terminated"  # player answered X at a pause


class Step(Enum):
    START = "start"
    ARRIVE = "arrive"
    DESCRIBE = "describe"
    SETTLE = "settle"
    LIST = "list"
    COMMAND = "command"
    READ = "read"
    HALT = "halt"


def pause(terminal: Terminal, text: str) -> Outcome | None:
    """Show a PAUSE prompt and wait for G or X.

    Returns None when the player resumes, otherwise how the run ends.
    """
    terminal.write(f"PAUSE: {text}\n")
    while True:
        terminal.write(
            f"TO RESUME EXECUTION, TYPE: {RESUME}\n"
            f"TO TERMINATE THE PROGRAM, TYPE: {TERMINATE}\n"
        )
        line = terminal.read_line()
        if line is None:
            return Outcome.COMPLETED
        answer = line.strip().upper()
        if answer == RESUME:
            terminal.write("EXECUTION RESUMED\n\n")
            return None
        if answer == TERMINATE:
            logger.info("run_terminated", pause=text)
            return Outcome.TERMINATED


class Adventure:
    """One run of the game against a terminal and a random source."""

    def __init__(
        self,
        world: World,
        terminal: Terminal,
        rng: RandomSource,
        location_hook: Callable[[int], None] | None = None,
        state: GameState | None = None,
    ):
        self.world = world
        self.terminal = terminal
        self.rng = rng
        self.location_hook = location_hook
        self.state = state or new_game_state()
        self.outcome = Outcome.COMPLETED

        # Where the next ARRIVE goes, and the motion keyword that got us there
        self.destination = self.state.current_room
        self.keyword = 0

        # Words of the command being interpreted
        self.word = BLANK
        self.second = BLANK
        self.overflow = BLANK
        self.two_words = False

        self._steps: dict[Step, Callable[[], Step]] = {
            Step.START: self._start,
            Step.ARRIVE: self._arrive,
            Step.DESCRIBE: self._describe,
            Step.SETTLE: self._settle,
            Step.LIST: self._list,
            Step.COMMAND: self._command,
            Step.READ: self._read,
        }

    def run(self) -> Outcome:
        logger.info("run_started")
        step = Step.START
        while step is not Step.HALT:
            step = self._steps[step]()
        logger.info(
            "run_finished",
            outcome=self.outcome.value,
            commands=self.state.commands,
            deaths=self.state.deaths,
            room=self.state.current_room,
        )
        return self.outcome

    # -- terminal helpers ---------------------------------------------------

    def _write(self, text: str) -> None:
        if text:
            self.terminal.write(text)

    def _speak(self, number: int) -> None:
        self._write(message(self.world, number))

    def _read_line(self) -> str | None:
        line = self.terminal.read_line()
        if line is None:
            self.outcome = Outcome.COMPLETED
        return line

    def _pause(self, text: str) -> bool:
        """Show a PAUSE prompt; True when the player chose to resume."""
        outcome = pause(self.terminal, text)
        if outcome is None:
            return True
        self.outcome = outcome
        return False

    def _ask(self, question: Question) -> bool | None:
        """Ask a yes/no question; anything but NO or N counts as yes."""
        self._speak(question.ask)
        line = self._read_line()
        if line is None:
            return None
        if read_command(line).first in NO_ANSWERS:
            self._speak(question.no)
            return False
        self._speak(question.yes)
        return True

    def _game_over(self, text: str, cause: str) -> Step:
        """A fatal accident that starts the game again."""
        self.state.deaths += 1
        logger.info("player_killed", cause=cause, room=self.state.current_room)
        if not self._pause(text):
            return Step.HALT
        restart_game(self.state)
        logger.info("game_restarted", restarts=self.state.restarts)
        return Step.START

    # -- steps --------------------------------------------------------------

    def _start(self) -> Step:
        if not self._pause("INIT DONE"):
            return Step.HALT
        if self._ask(WELCOME) is None:
            return Step.HALT
        self.state.current_room = self.destination = 1
        return Step.ARRIVE

    def _arrive(self) -> Step:
        state = self.state
        room = self.destination
        if self.location_hook is not None:
            self.location_hook(room)

        if dwarves.blocks(state, room):
            self._speak(BLOCKED)
            room = state.current_room
        if room != state.current_room:
            state.look_count = 0
        state.current_room = room

        encounter = dwarves.advance(state, self.rng)
        self._write(dwarves.narrate(self.world, encounter))
        if encounter.fatal:
            state.deaths += 1
            if not self._pause("GAMES OVER"):
                return Step.HALT
        return Step.DESCRIBE

    def _describe(self) -> Step:
        state = self.state
        here = state.current_room
        self._write(describe_room(self.world, state, here))

        room = self.world.room(here)
        if room.is_forced:
            if not room.edges:
                return self._game_over("GAME IS OVER", cause="dead_end")
            return self._travel(self.keyword)
        if here == HOLLOW_VOICE_ROOM and self.rng.ran(7) < HOLLOW_VOICE_CHANCE:
            self._speak(HOLLOW_VOICE)
        return Step.SETTLE

    def _settle(self) -> Step:
        state = self.state
        here = state.current_room
        state.misunderstood = 0
        state.visit(here)

        lit = self.world.room(here).is_light
        lamp_on = state.is_here(LAMP) and state.prop(LAMP) == 1
        state.dark = not (lit or lamp_on)
        if state.dark:
            self._speak(PITCH_BLACK)
        return Step.LIST

    def _list(self) -> Step:
        here = self.state.current_room
        self._write(list_objects(self.world, self.state, here))
        return Step.COMMAND

    def _command(self) -> Step:
        self.state.verb = 0
        self.state.obj = 0
        self.two_words = False
        return Step.READ

    def _read(self) -> Step:
        line = self._read_line()
        if line is None:
            return Step.HALT
        self.state.commands += 1

        command = read_command(line)
        self.word = command.first
        self.second = command.second if command.two_words else BLANK
        self.overflow = command.overflow
        self.two_words = command.two_words

        if self.word == "ENTER" and self.second in ("STREA", "WATER"):
            self._speak(FEET_WET)
            return Step.COMMAND
        if self.word == "ENTER" and self.two_words:
            self.word, self.overflow, self.two_words = self.second, BLANK, False

        if self.word == "WEST ":
            self.state.west_count += 1
            if self.state.west_count == WEST_HINT_AFTER:
                self._speak(WEST_HINT)
        return self._interpret()

    # -- interpreting a command ---------------------------------------------

    def _interpret(self) -> Step:
        word = lookup(self.world, self.word)
        if word is None:
            return self._misunderstood()
        if word.kind is WordKind.MOTION:
            return self._move(word.number)
        if word.kind is WordKind.OBJECT:
            return self._object(word.number)
        if word.kind is WordKind.VERB:
            return self._verb(word.number)
        self._speak(word.number)
        return Step.COMMAND

    def _next_word(self) -> Step:
        """Go on to interpret the second word of the command."""
        self.word, self.overflow, self.two_words = self.second, BLANK, False
        return self._interpret()

    def _echo(self) -> str:
        """The word being interpreted, with the rest of a long word if any."""
        if self.overflow != BLANK:
            return self.word + self.overflow
        return self.word

    def _misunderstood(self) -> Step:
        state = self.state
        self._speak(misunderstood_reply(self.rng))
        state.misunderstood += 1
        if state.misunderstood != PATIENCE:
            return Step.READ

        question = clarifying_question(state)
        if question is not None:
            answer = self._ask(question)
            if answer is None:
                return Step.HALT
            return Step.READ if answer else Step.COMMAND
        self._speak(rod_hint(state))
        return Step.READ

    def _move(self, keyword: int) -> Step:
        if self.state.dark and self.rng.ran(5014) <= DARK_FALL_CHANCE:
            self._speak(FELL_IN_PIT)
            self.state.deaths += 1
            logger.info("player_killed", cause="dark", room=self.state.current_room)
            if not self._pause("GAME IS OVER"):
                return Step.HALT
            return Step.COMMAND
        return self._travel(keyword)

    def _travel(self, keyword: int) -> Step:
        journey = travel(self.world, self.state, keyword, self.state.verb, self.rng)
        for number in journey.messages:
            self._speak(number)
        if journey.game_over:
            return self._game_over("GAME IS OVER", cause="fall")
        self.destination = journey.destination
        self.keyword = keyword
        return Step.ARRIVE

    def _object(self, obj: int) -> Step:
        state = self.state
        state.obj = obj
        if self.two_words:
            return self._next_word()

        here = state.current_room
        if not state.is_here(obj):
            if obj == GRATE:
                if here in OUTSIDE_GRATE:
                    return self._move(GRATE_FROM_ABOVE)
                if here in UNDER_GRATE:
                    return self._move(GRATE_FROM_BELOW)
            self._write(f" I SEE NO {self._echo()} HERE.\n")
            return Step.COMMAND

        if state.verb:
            return self._dispatch(act(state, state.verb, obj, self.rng))
        self._write(f" WHAT DO YOU WANT TO DO WITH THE {self._echo()}?\n")
        return Step.READ

    def _verb(self, verb: int) -> Step:
        state = self.state
        state.verb = verb
        if self.two_words:
            return self._next_word()
        if state.obj == 0:
            return self._dispatch(act_bare(state, verb, self.rng))
        return self._dispatch(act(state, verb, state.obj, self.rng))

    def _dispatch(self, reply: Reply) -> Step:
        for number in reply.messages:
            self._speak(number)
        if reply.followup is Followup.CLARIFY:
            if self.overflow != BLANK:
                self._write(f" {self.word}{self.overflow} WHAT?\n")
            else:
                self._write(f"  {self.word} WHAT?\n")
            return Step.READ
        if reply.followup is Followup.RELIST:
            return Step.LIST
        if reply.followup is Followup.TRAVEL:
            return self._move(reply.keyword)
        if reply.followup is Followup.MISUNDERSTOOD:
            return self._misunderstood()
        return Step.COMMAND
