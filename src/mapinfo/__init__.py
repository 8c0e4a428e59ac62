"""MAPINFO configuration text parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mapinfo.model import MapInfo

__version__ = "0.1.0"


def load(source: str) -> MapInfo:
    """Parse MAPINFO source text into blocks, raising MapInfoError on bad input."""
    from mapinfo.parser import parse

    return parse(source)
