"""MAPINFO parser: links a flat token stream into blocks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from mapinfo.errors import ParseError
from mapinfo.lexer import DEFAULT_COMMENT_MARKERS, tokenize
from mapinfo.model import Block, LinkedToken, MapInfo
from mapinfo.tokens import DATA_TYPES, TextLoc, Token, TokenType


class Parser:
    """Single pass linker over a token list, one token of lookahead.

    Every token goes into the arena at the same index it had in the token
    list; parsing only sets the ``next``/``next_data`` links between them.
    """

    def __init__(self, tokens: list[Token], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._pos = 0
        self._nodes = [LinkedToken(tok) for tok in tokens]
        self._blocks: list[tuple[int, int | None, int | None]] = []
        self._block_type: int | None = None
        self._null = _null_token(tokens)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._null

    def _advance(self) -> int:
        """Consume the current token and return its arena index."""
        idx = self._pos
        self._pos += 1
        return idx

    def _link_next(self, from_idx: int, to_idx: int) -> None:
        self._nodes[from_idx] = replace(self._nodes[from_idx], next=to_idx)

    def _link_data(self, from_idx: int, to_idx: int) -> None:
        self._nodes[from_idx] = replace(self._nodes[from_idx], next_data=to_idx)

    def _error(self, tok: Token, expected: str) -> ParseError:
        if tok.type == TokenType.NULL and self._block_type is not None:
            # Nothing left to point at; blame the block that was left open
            type_tok = self._tokens[self._block_type]
            return ParseError(
                f"Unexpected end of MAPINFO! Expected {expected} in block '{type_tok.text}'.",
                type_tok.end,
                self._source,
            )
        if tok.type == TokenType.NULL:
            return ParseError(f"Unexpected end of MAPINFO! Expected {expected}.", tok.begin, self._source)
        return ParseError(
            f"Expected {expected} but found '{tok.raw}'!", tok.begin, self._source, tok.end
        )

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def parse(self) -> MapInfo:
        while self._peek().type != TokenType.NULL:
            self._parse_block()

        arena = tuple(self._nodes)
        blocks = tuple(
            Block(arena, self._source, type_idx, header, values)
            for type_idx, header, values in self._blocks
        )
        return MapInfo(arena, blocks, self._source)

    def _parse_block(self) -> None:
        tok = self._peek()
        if tok.type != TokenType.IDENTIFIER:
            raise self._error(tok, "a block type identifier")
        type_idx = self._advance()
        self._block_type = type_idx

        header = self._parse_header()
        values = self._parse_values()

        self._blocks.append((type_idx, header, values))
        self._block_type = None

    def _parse_header(self) -> int | None:
        """Link header tokens up to and including the '{'. Returns the first header."""
        first: int | None = None
        prev: int | None = None

        while True:
            tok = self._peek()
            if tok.type == TokenType.OPEN_BLOCK:
                self._advance()
                return first
            if tok.type not in DATA_TYPES:
                raise self._error(tok, "a block header value or '{'")

            idx = self._advance()
            if prev is None:
                first = idx
            else:
                self._link_next(prev, idx)
            prev = idx

    def _parse_values(self) -> int | None:
        """Link value names up to and including the '}'. Returns the first value."""
        first: int | None = None
        prev: int | None = None

        while True:
            tok = self._peek()
            if tok.type == TokenType.CLOSE_BLOCK:
                self._advance()
                return first
            if tok.type != TokenType.IDENTIFIER:
                raise self._error(tok, "a value name or '}'")

            idx = self._advance()
            if prev is None:
                first = idx
            else:
                self._link_next(prev, idx)
            prev = idx

            # No '=' means a bare flag
            if self._peek().type == TokenType.EQUALS:
                self._advance()
                self._parse_value_data(idx)

    def _parse_value_data(self, name_idx: int) -> None:
        prev = name_idx
        while True:
            tok = self._peek()
            if tok.type not in DATA_TYPES:
                raise self._error(tok, "a value after '=' or ','")

            idx = self._advance()
            self._link_data(prev, idx)
            prev = idx

            if self._peek().type != TokenType.NEXT_VALUE:
                return
            self._advance()


def _null_token(tokens: list[Token]) -> Token:
    """NULL token placed at the end of input, for end-of-stream checks."""
    end = tokens[-1].end if tokens else TextLoc(0, 0, 0)
    return Token(TokenType.NULL, end, end, "")


def parse(source: str, comment_markers: Iterable[str] = DEFAULT_COMMENT_MARKERS) -> MapInfo:
    """Convenience function: tokenize and link source text into a MapInfo."""
    tokens = tokenize(source, comment_markers)
    return Parser(tokens, source).parse()
