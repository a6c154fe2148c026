"""Logging configuration for advent77.

Everything the player sees goes to stdout, so log events are written to
stderr, or appended to a log file when one is configured. There is no
request to fingerprint in a terminal game; the context that matters is the
run itself, which play() binds with structlog's contextvars so every event
of one game carries its seed.
"""

import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}
DEFAULT_LEVEL = "WARNING"


def _level_to_int(level: str) -> int:
    return LEVELS.get(level.upper(), LEVELS[DEFAULT_LEVEL])


def _renderer(json_logs: bool, stream: TextIO) -> Any:
    if json_logs:
        return structlog.processors.JSONRenderer()
    # A log file or a redirected stderr gets no colour codes
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    log_level: str = DEFAULT_LEVEL,
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Route structlog events away from the game's own output."""
    stream = log_file.open("a", encoding="utf-8") if log_file else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(
                fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
            ),
            _renderer(json_logs, stream),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
