"""Shared test fixtures for advent77."""

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from advent77.config import Config
from advent77.engine.game import Adventure, Outcome
from advent77.engine.loader import load_world
from advent77.engine.state import GameState, new_game_state
from advent77.engine.world import World

# Answers to the INIT DONE pause and the welcome question
OPENING = ["g", "no"]


class ScriptedTerminal:
    """Feeds canned input lines and collects everything written."""

    def __init__(self, lines: Iterable[str] = ()):
        self.lines = deque(lines)
        self.output: list[str] = []

    def read_line(self) -> str | None:
        if not self.lines:
            return None
        return self.lines.popleft()

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "".join(self.output)


class ScriptedRandom:
    """Returns queued values, then a constant, recording each call site."""

    def __init__(self, values: Iterable[float] = (), default: float = 0.1):
        self.values = deque(values)
        self.default = default
        self.sites: list[int] = []

    def ran(self, site: int) -> float:
        self.sites.append(site)
        if self.values:
            return self.values.popleft()
        return self.default


@dataclass
class Playthrough:
    """The result of running the game over a script."""

    outcome: Outcome
    state: GameState
    terminal: ScriptedTerminal
    rng: ScriptedRandom
    trace: list[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.terminal.text


@pytest.fixture(scope="session")
def world() -> World:
    return load_world(Config().data_path)


@pytest.fixture
def state() -> GameState:
    return new_game_state()


@pytest.fixture
def rng() -> ScriptedRandom:
    return ScriptedRandom()


@pytest.fixture
def play(world: World) -> Callable[..., Playthrough]:
    """Run a script of commands from the start of a game."""

    def _play(
        commands: Iterable[str],
        rng: ScriptedRandom | None = None,
        opening: Iterable[str] = OPENING,
    ) -> Playthrough:
        terminal = ScriptedTerminal([*opening, *commands])
        rng = rng or ScriptedRandom()
        trace: list[int] = []
        game = Adventure(world, terminal, rng, location_hook=trace.append)
        outcome = game.run()
        return Playthrough(outcome, game.state, terminal, rng, trace)

    return _play


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db", seed=1977)
