"""Keyword codes and the two-word command reader.

Every word the game compares is a keyword code: five upper-case characters,
truncated or padded with blanks. The 1977 program packed a code into one
36-bit PDP-10 word (five 7-bit characters, left justified, the low bit
unused); pack() and unpack() convert between that form and text.
"""

from dataclasses import dataclass

WORD_WIDTH = 5
BLANK = " " * WORD_WIDTH

# Only this much of an input line is ever looked at
LINE_WIDTH = 20

_CHAR_BITS = 7
_CHAR_MASK = 0o177


def pack(text: str) -> int:
    """Pack a word into an A5 word.

    The word is upper-cased and truncated or blank padded to five characters
    first, so any input packs to a valid code.
    """
    code = 0
    for ch in text.upper()[:WORD_WIDTH].ljust(WORD_WIDTH):
        code = (code << _CHAR_BITS) | (ord(ch) & _CHAR_MASK)
    return code << 1


def unpack(code: int) -> str:
    """Unpack an A5 word into its five characters."""
    code >>= 1
    chars = []
    for shift in range((WORD_WIDTH - 1) * _CHAR_BITS, -1, -_CHAR_BITS):
        chars.append(chr((code >> shift) & _CHAR_MASK))
    return "".join(chars)


def keyword(text: str) -> str:
    """Normalise a word to its keyword code."""
    return unpack(pack(text))


@dataclass(frozen=True)
class Command:
    """One line of player input, reduced to keyword codes.

    ``second`` is only meaningful when ``two_words`` is set. ``overflow``
    holds characters 6-10 of the input, so a long first word can be echoed
    back in full.
    """

    two_words: bool
    first: str
    second: str = BLANK
    overflow: str = BLANK


def read_command(line: str) -> Command:
    """Split a line of input into one or two keyword codes."""
    text = line.lstrip()[:LINE_WIDTH]
    words = text.split()
    if not words:
        return Command(two_words=False, first=BLANK)

    overflow = keyword(text[WORD_WIDTH : 2 * WORD_WIDTH])
    if len(words) == 1:
        return Command(two_words=False, first=keyword(words[0]), overflow=overflow)
    return Command(
        two_words=True,
        first=keyword(words[0]),
        second=keyword(words[1]),
        overflow=overflow,
    )
