"""Terminal and random source for an interactive session."""

import random
import sys
from typing import TextIO


class ConsoleTerminal:
    """Reads commands from one stream and writes narration to another."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def read_line(self) -> str | None:
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()


class SeededRandom:
    """Uniform draws from random.Random; a seed makes a run repeatable."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def ran(self, site: int) -> float:
        return self._random.random()
