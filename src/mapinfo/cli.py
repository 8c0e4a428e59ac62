"""Command-line checker for MAPINFO files."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mapinfo.errors import MapInfoError
from mapinfo.lexer import DEFAULT_COMMENT_MARKERS
from mapinfo.model import MapInfo
from mapinfo.tokens import is_delimiter


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    comment_markers: tuple[str, ...]
    dump: bool
    watch: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="mapinfo",
        description="Check a MAPINFO file and report the first error",
    )
    p.add_argument("input", help="Input MAPINFO file")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover mapinfo.toml)",
    )
    p.add_argument(
        "-c",
        "--comment",
        action="append",
        default=[],
        metavar="MARKER",
        help="Line comment marker (repeatable, replaces the defaults)",
    )
    p.add_argument("--dump", action="store_true", help="Dump the parsed blocks to stderr")
    p.add_argument("--watch", action="store_true", help="Watch for changes and recheck")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "mapinfo.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def config_comment_markers(config: dict[str, Any]) -> tuple[str, ...]:
    """Comment markers from a loaded config, or the defaults."""
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_markers = cfg_lexer.get("comment_markers")
        if isinstance(cfg_markers, list):
            return tuple(str(m) for m in cfg_markers)
    return DEFAULT_COMMENT_MARKERS


def check_comment_markers(markers: tuple[str, ...]) -> None:
    """Reject markers that would swallow whitespace or structural characters."""
    for marker in markers:
        if not marker or marker[0].isspace() or is_delimiter(marker[0]):
            raise argparse.ArgumentTypeError(f"invalid comment marker: {marker!r}")


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Comment markers: defaults < config < CLI
    comment_markers = config_comment_markers(config)
    if args.comment:
        comment_markers = tuple(args.comment)
    check_comment_markers(comment_markers)

    # Dump: config < CLI
    dump = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict) and isinstance(cfg_output.get("dump"), bool):
        dump = cfg_output["dump"]
    if args.dump:
        dump = True

    return CliOptions(
        input_file=input_file,
        comment_markers=comment_markers,
        dump=dump,
        watch=args.watch,
    )


def check_file(options: CliOptions) -> MapInfo:
    """Read and parse a MAPINFO file, dumping the result if requested."""
    from mapinfo.debug import dump_mapinfo
    from mapinfo.parser import parse

    source = options.input_file.read_text(encoding="utf-8")
    info = parse(source, options.comment_markers)

    if options.dump:
        dump_mapinfo(info)

    return info


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recheck on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    info = check_file(options)
                    print(f"Checked {options.input_file}: {len(info.blocks)} blocks", file=sys.stderr)
                except MapInfoError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        info = check_file(options)
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as exc:
        print(f"error: {options.input_file} is not valid UTF-8: {exc.reason}", file=sys.stderr)
        return 2
    except MapInfoError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    print(f"{options.input_file}: OK ({len(info.blocks)} blocks)", file=sys.stderr)
    return 0
