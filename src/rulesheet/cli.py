"""Command-line interface for rulesheet."""

from __future__ import annotations

import argparse
import io
import json
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rulesheet.errors import ParseError
from rulesheet.model import Document

FORMATS = ("tree", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    output_format: str
    indent: int
    keep_quotes: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="rulesheet",
        description="Parse a stylesheet into rule sets and declarations",
    )
    p.add_argument("input", help="Input stylesheet file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: tree)",
    )
    p.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="JSON indent width (default: 2)",
    )
    p.add_argument(
        "--keep-quotes",
        action="store_true",
        default=None,
        help="Keep quote characters around quoted strings in values",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover rulesheet.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-parse")
    p.add_argument("--debug", action="store_true", help="Dump document tree to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "rulesheet.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Quote policy: config < CLI
    keep_quotes = False
    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        cfg_keep = cfg_parser.get("keep_quotes")
        if isinstance(cfg_keep, bool):
            keep_quotes = cfg_keep
    if args.keep_quotes is not None:
        keep_quotes = args.keep_quotes

    # Output format and indent: config < CLI
    output_format = "tree"
    indent = 2
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config: {cfg_format!r}"
                )
            output_format = cfg_format
        cfg_indent = cfg_output.get("indent")
        if isinstance(cfg_indent, int) and not isinstance(cfg_indent, bool):
            indent = cfg_indent
    if args.format is not None:
        output_format = args.format
    if args.indent is not None:
        indent = args.indent

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        output_format=output_format,
        indent=indent,
        keep_quotes=keep_quotes,
        watch=args.watch,
        debug=args.debug,
    )


def parse_file(options: CliOptions) -> Document:
    """Read and parse a stylesheet file."""
    from rulesheet.debug import dump_document
    from rulesheet.engine import parse

    source = options.input_file.read_text(encoding="utf-8")
    doc = parse(source, str(options.input_file), keep_quotes=options.keep_quotes)

    if options.debug:
        dump_document(doc)

    return doc


def render_output(doc: Document, options: CliOptions) -> str:
    """Render a parsed document in the requested output format."""
    from rulesheet.debug import document_to_dict, dump_document

    if options.output_format == "json":
        return json.dumps(document_to_dict(doc), indent=options.indent) + "\n"

    out = io.StringIO()
    dump_document(doc, file=out)
    return out.getvalue()


def _write(text: str, options: CliOptions) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-parse on each modification."""
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
                    doc = parse_file(options)
                    _write(render_output(doc, options), options)
                    print(f"Parsed {options.input_file}", file=sys.stderr)
                except ParseError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
                except UnicodeDecodeError as exc:
                    print(
                        f"error: cannot decode {options.input_file}: {exc.reason}",
                        file=sys.stderr,
                    )
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        doc = parse_file(options)
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as exc:
        print(
            f"error: cannot decode {options.input_file} as UTF-8: {exc.reason}",
            file=sys.stderr,
        )
        return 2

    _write(render_output(doc, options), options)
    return 0
