"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    NULL = auto()  # end of input, never stored

    # Data
    IDENTIFIER = auto()  # unquoted word like Map or NoIntermission
    STRING = auto()  # "quoted text"
    NUMBER = auto()  # integer, hex or float
    TRUE = auto()  # true (numeric 1)
    FALSE = auto()  # false (numeric 0)

    # Structural (single-character)
    EQUALS = auto()  # =
    OPEN_BLOCK = auto()  # {
    CLOSE_BLOCK = auto()  # }
    NEXT_VALUE = auto()  # ,


# Token types that may appear as a block header or as value data
DATA_TYPES = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.STRING,
        TokenType.NUMBER,
        TokenType.TRUE,
        TokenType.FALSE,
    }
)


@dataclass(frozen=True, slots=True)
class TextLoc:
    """Source location, 0-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexeme with its original source text."""

    type: TokenType
    begin: TextLoc
    end: TextLoc
    raw: str
    number: float = 0.0

    @property
    def size(self) -> int:
        return self.end.offset - self.begin.offset

    @property
    def text(self) -> str:
        """Token text, with the quotes removed for strings."""
        if self.type == TokenType.STRING:
            return self.raw[1:-1]
        return self.raw

    def text_equals_ignore_case(self, other: str) -> bool:
        # Character by character, so case folding never changes the length
        text = self.text
        return len(text) == len(other) and all(
            a.casefold() == b.casefold() for a, b in zip(text, other)
        )

    def as_number(self) -> float | None:
        """Numeric value of NUMBER/TRUE/FALSE tokens, None for everything else."""
        if self.type == TokenType.NUMBER:
            return self.number
        if self.type == TokenType.TRUE:
            return 1.0
        if self.type == TokenType.FALSE:
            return 0.0
        return None


SINGLE_CHAR_TOKENS = {
    "{": TokenType.OPEN_BLOCK,
    "}": TokenType.CLOSE_BLOCK,
    "=": TokenType.EQUALS,
    ",": TokenType.NEXT_VALUE,
}

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX_RE = re.compile(r"([+-]?)0[xX]([0-9a-fA-F]+)")


def is_space(ch: str) -> bool:
    return ch in " \t\r\n\v\f"


def is_delimiter(ch: str) -> bool:
    """Return True if ch ends a bare word."""
    return is_space(ch) or ch in SINGLE_CHAR_TOKENS or ch == '"'


def looks_numeric(text: str) -> bool:
    """Return True if text must be parsed as a number."""
    if not text:
        return False
    first = text[0]
    if first.isdigit() or first in "+-":
        return True
    return first == "." and len(text) > 1 and text[1].isdigit()


def parse_number(text: str) -> float | None:
    """Parse a decimal integer, decimal float or hex integer, None on failure."""
    m = _HEX_RE.fullmatch(text)
    if m:
        try:
            value = float(int(m.group(2), 16))
        except OverflowError:
            return None
        return -value if m.group(1) == "-" else value
    if _DECIMAL_RE.fullmatch(text):
        value = float(text)
        # Out of range literals like 1e400 overflow to inf
        return value if math.isfinite(value) else None
    return None
