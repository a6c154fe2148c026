"""Collaborators the engine is given rather than creating itself."""

from typing import Protocol


class Terminal(Protocol):
    def read_line(self) -> str | None:
        """Return the next line of input without its newline, or None at end."""
        ...

    def write(self, text: str) -> None: ...


class RandomSource(Protocol):
    def ran(self, site: int) -> float:
        """Return a uniform number in [0, 1].

        ``site`` names the decision being made, so scripted sources can
        check they are asked in the expected order.
        """
        ...
