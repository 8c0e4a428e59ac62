"""Error types with formatted source context."""

from __future__ import annotations

from mapinfo.tokens import TextLoc


class MapInfoError(Exception):
    """Base for all MAPINFO errors. Always fatal to the current load."""

    def __init__(
        self,
        message: str,
        loc: TextLoc,
        source: str,
        end: TextLoc | None = None,
    ) -> None:
        self.message = message
        self.loc = loc
        self.end = end
        self.source = source
        super().__init__(f"{self.headline}\n{message}")

    @property
    def headline(self) -> str:
        return f"Error parsing MAPINFO at line {self.loc.line + 1} column {self.loc.column + 1}!"

    def format(self, filename: str = "MAPINFO") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.loc.line
        col = self.loc.column + 1

        # Build the source line (strip trailing newline for display)
        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full token when it sits on one line
        if self.end is not None and self.end.line == self.loc.line:
            underline_len = max(1, self.end.column - self.loc.column)
        else:
            underline_len = 1

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.loc.line + 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.loc.line + 1}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class LexError(MapInfoError):
    """Raised on the first lexing error: unterminated string or bad number."""


class ParseError(MapInfoError):
    """Raised on the first structural error in the token stream."""


class SchemaError(MapInfoError):
    """Raised by required-header accessors when a block's header is unusable."""
