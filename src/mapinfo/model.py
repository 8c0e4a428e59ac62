"""Parsed MAPINFO structure: the token arena, blocks, and block queries.

All tokens of a document live in a single tuple owned by ``MapInfo``. Links
between tokens (header chains, value chains, data arrays) are stored as indices
into that tuple, so blocks never copy tokens and never hold dangling links.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from mapinfo.errors import SchemaError
from mapinfo.tokens import Token

INVALID_HEADER_MESSAGE = (
    "MAPINFO block has an invalid header! See the MAPINFO docs for the expected format."
)


@dataclass(frozen=True, slots=True)
class LinkedToken:
    """A token plus its relations to other tokens in the arena.

    ``next`` links a header token to the following header token, or a value
    name token to the following value name in the same block. ``next_data``
    links a value name to its first data token and each data token to the next
    array entry. Both are arena indices or None.
    """

    token: Token
    next: int | None = None
    next_data: int | None = None


@dataclass(frozen=True, slots=True)
class Block:
    """One block: a type keyword, optional header tokens, optional values."""

    arena: tuple[LinkedToken, ...] = field(repr=False)
    source: str = field(repr=False)
    type: int
    header: int | None = None
    values: int | None = None

    # ------------------------------------------------------------------
    # Chain walking
    # ------------------------------------------------------------------

    def _walk_next(self, start: int | None) -> Iterator[LinkedToken]:
        idx = start
        while idx is not None:
            linked = self.arena[idx]
            yield linked
            idx = linked.next

    def data_tokens(self, name: LinkedToken) -> Iterator[Token]:
        """Yield the data entries linked from a value name token."""
        idx = name.next_data
        while idx is not None:
            linked = self.arena[idx]
            yield linked.token
            idx = linked.next_data

    @property
    def type_token(self) -> Token:
        return self.arena[self.type].token

    @property
    def type_name(self) -> str:
        return self.type_token.text

    # ------------------------------------------------------------------
    # Header tokens
    # ------------------------------------------------------------------

    def header_tokens(self) -> Iterator[Token]:
        for linked in self._walk_next(self.header):
            yield linked.token

    def get_header_token_count(self) -> int:
        return sum(1 for _ in self._walk_next(self.header))

    def get_header_token(self, index: int) -> Token | None:
        """Return the header token at index, or None if there is no such header."""
        if index < 0:
            return None
        for i, token in enumerate(self.header_tokens()):
            if i == index:
                return token
        return None

    def _schema_error(self, detail: str | None = None) -> SchemaError:
        message = INVALID_HEADER_MESSAGE if detail is None else f"{INVALID_HEADER_MESSAGE}\n{detail}"
        return SchemaError(message, self.type_token.end, self.source)

    def ensure_min_header_token_count(self, count: int) -> None:
        actual = self.get_header_token_count()
        if actual < count:
            raise self._schema_error(
                f"Block '{self.type_name}' needs at least {count} header value(s) but has {actual}."
            )

    def get_required_header_token(self, index: int) -> Token:
        token = self.get_header_token(index)
        if token is None:
            raise self._schema_error(f"Block '{self.type_name}' is missing header value #{index + 1}.")
        return token

    def get_required_header_number(self, index: int) -> float:
        """Header number; true/false count as 1.0/0.0, any other type is an error."""
        number = self.get_required_header_token(index).as_number()
        if number is None:
            raise self._schema_error(
                f"Block '{self.type_name}' header value #{index + 1} must be a number."
            )
        return number

    def get_required_header_int(self, index: int) -> int:
        return int(self.get_required_header_number(index))

    def get_required_header_string(self, index: int) -> str:
        # Identifiers and numbers are accepted as strings too
        return self.get_required_header_token(index).text

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def value_tokens(self) -> Iterator[LinkedToken]:
        """Yield the value name tokens of the block in source order."""
        return self._walk_next(self.values)

    def get_value(self, name: str) -> LinkedToken | None:
        """Find a value by name (case insensitive); first match wins."""
        for linked in self.value_tokens():
            if linked.token.text_equals_ignore_case(name):
                return linked
        return None

    def has_value(self, name: str) -> bool:
        return self.get_value(name) is not None

    def get_value_data(self, name: str) -> tuple[Token, ...]:
        """All data tokens of a value; empty for a missing value or a bare flag."""
        linked = self.get_value(name)
        if linked is None:
            return ()
        return tuple(self.data_tokens(linked))

    def _first_data(self, name: str) -> tuple[LinkedToken | None, Token | None]:
        linked = self.get_value(name)
        if linked is None or linked.next_data is None:
            return linked, None
        return linked, self.arena[linked.next_data].token

    def get_single_number_value(self, name: str, default: float) -> float:
        """Number value, or default if missing or not numeric.

        A value with no data is a flag that is set, and reads as 1.0.
        Only the first entry of an array is considered.
        """
        linked, data = self._first_data(name)
        if data is None:
            return 1.0 if linked is not None else default
        number = data.as_number()
        return default if number is None else number

    def get_single_int_value(self, name: str, default: int) -> int:
        return int(self.get_single_number_value(name, float(default)))

    def get_single_string_value(self, name: str, default: str) -> str:
        _, data = self._first_data(name)
        return default if data is None else data.text

    def get_number_values(self, name: str) -> list[float]:
        """Every numeric entry of an array value, skipping non-numeric ones."""
        numbers = []
        for token in self.get_value_data(name):
            number = token.as_number()
            if number is not None:
                numbers.append(number)
        return numbers


@dataclass(frozen=True, slots=True)
class MapInfo:
    """Result of parsing: every token of the document plus the blocks over them."""

    tokens: tuple[LinkedToken, ...] = field(repr=False)
    blocks: tuple[Block, ...]
    source: str = field(default="", repr=False)

    def blocks_of_type(self, type_name: str) -> list[Block]:
        return [b for b in self.blocks if b.type_token.text_equals_ignore_case(type_name)]

    def find_block(self, type_name: str, header: str) -> Block | None:
        """First block of a type whose first header matches (case insensitive)."""
        for block in self.blocks_of_type(type_name):
            first = block.get_header_token(0)
            if first is not None and first.text_equals_ignore_case(header):
                return block
        return None
