"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from mapinfo.lexer import tokenize
from mapinfo.model import Block, MapInfo
from mapinfo.parser import parse
from mapinfo.tokens import Token, TokenType

EXAMPLE_SOURCE = 'map01 "My Map" 5 { Music = 3, 4, 5 }'


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens."""

    def _lex(source: str, comment_markers: tuple[str, ...] = ("//", "#")) -> list[Token]:
        return tokenize(source, comment_markers)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a MapInfo."""

    def _parse(source: str) -> MapInfo:
        return parse(source)

    return _parse


@pytest.fixture
def block():
    """Return a helper that parses source holding exactly one block."""

    def _block(source: str) -> Block:
        info = parse(source)
        assert len(info.blocks) == 1, f"Expected 1 block, got {len(info.blocks)}"
        return info.blocks[0]

    return _block


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
