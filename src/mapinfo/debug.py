"""--dump block tree printer to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from mapinfo.model import Block, MapInfo
from mapinfo.tokens import Token, TokenType


def dump_mapinfo(info: MapInfo, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable block tree to *file*."""
    file.write(f"MapInfo ({len(info.blocks)} blocks, {len(info.tokens)} tokens)\n")
    for block in info.blocks:
        _dump_block(block, 1, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _describe(token: Token) -> str:
    if token.type == TokenType.NUMBER:
        return f"Number({token.number:g})"
    if token.type == TokenType.STRING:
        return f"String({token.text!r})"
    if token.type == TokenType.IDENTIFIER:
        return f"Identifier({token.text})"
    return token.type.name.capitalize()


def _dump_block(block: Block, depth: int, f: TextIO) -> None:
    headers = " ".join(_describe(t) for t in block.header_tokens())
    line = block.type_token.begin.line + 1
    f.write(f"{_indent(depth)}Block {block.type_name} {headers}".rstrip() + f"  @{line}\n")
    for linked in block.value_tokens():
        data = [_describe(t) for t in block.data_tokens(linked)]
        if data:
            f.write(f"{_indent(depth + 1)}{linked.token.text} = {', '.join(data)}\n")
        else:
            f.write(f"{_indent(depth + 1)}{linked.token.text} (flag)\n")
