"""MAPINFO lexer: converts source text into a flat token stream."""

from __future__ import annotations

from collections.abc import Iterable

from mapinfo.errors import LexError
from mapinfo.tokens import (
    SINGLE_CHAR_TOKENS,
    TextLoc,
    Token,
    TokenType,
    is_delimiter,
    is_space,
    looks_numeric,
    parse_number,
)

DEFAULT_COMMENT_MARKERS = ("//", "#")


class Lexer:
    """Tokenize MAPINFO source text into a stream of Token objects."""

    def __init__(self, source: str, comment_markers: Iterable[str] = DEFAULT_COMMENT_MARKERS) -> None:
        self._source = source
        # A NUL terminates the text, like the C buffers MAPINFO lumps come from
        nul = source.find("\0")
        self._limit = nul if nul >= 0 else len(source)
        self._comment_markers = tuple(m for m in comment_markers if m)
        self._pos = 0
        self._line = 0
        self._col = 0

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list (without NULL)."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            if tok.type == TokenType.NULL:
                return tokens
            tokens.append(tok)

    def next_token(self) -> Token:
        """Read the next token, or a NULL token once the input is exhausted."""
        self._skip_space_and_comments()
        start = self._current_loc()

        if self._at_end():
            return Token(TokenType.NULL, start, start, "")

        ch = self._peek()

        if ch in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make(SINGLE_CHAR_TOKENS[ch], start)

        if ch == '"':
            return self._lex_string(start)

        return self._lex_word(start)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_loc(self) -> TextLoc:
        return TextLoc(self._line, self._col, self._pos)

    def _at_end(self) -> bool:
        return self._pos >= self._limit

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < self._limit:
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 0
        else:
            self._col += 1
        return ch

    def _make(self, tt: TokenType, start: TextLoc, number: float = 0.0) -> Token:
        raw = self._source[start.offset : self._pos]
        return Token(tt, start, self._current_loc(), raw, number)

    def _error(self, message: str, start: TextLoc) -> LexError:
        return LexError(message, start, self._source, self._current_loc())

    # ------------------------------------------------------------------
    # Skipping
    # ------------------------------------------------------------------

    def _at_comment(self) -> bool:
        return any(self._source.startswith(m, self._pos, self._limit) for m in self._comment_markers)

    def _skip_space_and_comments(self) -> None:
        while not self._at_end():
            ch = self._peek()
            if is_space(ch):
                self._advance()
            elif self._at_comment():
                # Comment runs to the end of the line, terminator included
                while not self._at_end() and self._advance() != "\n":
                    pass
            else:
                return

    # ------------------------------------------------------------------
    # Strings and words
    # ------------------------------------------------------------------

    def _lex_string(self, start: TextLoc) -> Token:
        self._advance()  # consume opening quote
        while not self._at_end():
            ch = self._advance()
            if ch == '"':
                return self._make(TokenType.STRING, start)
            if ch == "\\" and not self._at_end():
                self._advance()
        raise LexError("Unterminated string! Expected a closing '\"'.", start, self._source)

    def _lex_word(self, start: TextLoc) -> Token:
        while not self._at_end() and not is_delimiter(self._peek()) and not self._at_comment():
            self._advance()

        text = self._source[start.offset : self._pos]
        lowered = text.lower()

        if lowered == "true":
            return self._make(TokenType.TRUE, start)
        if lowered == "false":
            return self._make(TokenType.FALSE, start)

        if looks_numeric(text):
            number = parse_number(text)
            if number is None:
                raise self._error(f"Invalid number '{text}'!", start)
            return self._make(TokenType.NUMBER, start, number)

        return self._make(TokenType.IDENTIFIER, start)


def tokenize(source: str, comment_markers: Iterable[str] = DEFAULT_COMMENT_MARKERS) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source, comment_markers).tokenize()
