"""Will Crowther's 1977 Colossal Cave Adventure."""

import datetime as dt

from structlog.contextvars import bound_contextvars

from .config import Config
from .console import ConsoleTerminal, SeededRandom
from .engine.game import Adventure, Outcome, pause
from .engine.loader import DataFormatError, load_world
from .engine.protocols import Terminal
from .engine.travel import MapError
from .logging import configure_logging, get_logger
from .session import PlayJournal

__all__ = ["main", "play", "Config"]

EXIT_OK = 0
EXIT_TERMINATED = 1
EXIT_FAILURE = 2

FAILED = "failed"


def play(config: Config, terminal: Terminal) -> int:
    """Load the world, run one game and return the process exit status."""
    with bound_contextvars(seed=config.seed):
        return _play(config, terminal)


def _play(config: Config, terminal: Terminal) -> int:
    logger = get_logger(__name__)
    started_at = dt.datetime.now(dt.UTC)

    try:
        world = load_world(config.data_path)
    except DataFormatError as exc:
        logger.error("data_error", error=str(exc))
        pause(terminal, str(exc))
        return EXIT_FAILURE

    game = Adventure(world, terminal, SeededRandom(config.seed))
    try:
        outcome = game.run().value
    except MapError as exc:
        logger.error("map_error", error=str(exc), room=game.state.current_room)
        outcome = FAILED

    if config.database_url:
        PlayJournal.from_url(config.database_url).record(
            game.state, outcome, started_at, seed=config.seed
        )

    if outcome == FAILED:
        return EXIT_FAILURE
    if outcome == Outcome.TERMINATED.value:
        terminal.write("EXECUTION TERMINATED.\n")
        return EXIT_TERMINATED
    return EXIT_OK


def main() -> int:
    """Entry point for the advent77 console script."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
    )

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        data_file=str(config.data_path),
        seed=config.seed,
        journal=bool(config.database_url),
    )
    return play(config, ConsoleTerminal())
