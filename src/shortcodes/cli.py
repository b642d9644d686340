"""Command-line interface for shortcodes."""

from __future__ import annotations

import argparse
import io
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shortcodes.errors import ShortcodeSyntaxError
from shortcodes.recovery import Repair

MODES = ("render", "template", "tree", "tokens")
CONFIG_NAME = "shortcodes.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    mode: str
    skip_whitespace: bool
    strict: bool
    check: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="shortcodes",
        description="Parse shortcode markup and print it back normalized",
    )
    p.add_argument("input", help="Input file ('-' for stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default=None,
        help="Output mode (default: render)",
    )
    p.add_argument(
        "--skip-whitespace",
        action="store_true",
        default=None,
        help="Drop whitespace-only text between tags",
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if any tag nesting had to be repaired",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log repairs to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"config: '{key}' must be true or false, got {value!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_parser = config.get("parser")
    if not isinstance(cfg_parser, dict):
        cfg_parser = {}
    skip_whitespace = _config_bool(cfg_parser, "skip_whitespace", False)
    strict = _config_bool(cfg_parser, "strict", True)
    if args.skip_whitespace is not None:
        skip_whitespace = args.skip_whitespace

    mode = "render"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict) and "mode" in cfg_output:
        mode = cfg_output["mode"]
        if mode not in MODES:
            raise argparse.ArgumentTypeError(
                f"config: output mode must be one of {', '.join(MODES)}, got {mode!r}"
            )
    if args.mode is not None:
        mode = args.mode

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        mode=mode,
        skip_whitespace=skip_whitespace,
        strict=strict,
        check=args.check,
        verbose=args.verbose,
    )


def process_source(source: str, options: CliOptions) -> tuple[str, list[Repair]]:
    """Tokenize/build *source* and produce the output for the selected mode."""
    from shortcodes.debug import dump_forest, dump_tokens
    from shortcodes.render import build_template, render_forest
    from shortcodes.tokenizer import Options, ShortcodesTokenizer

    tokenizer = ShortcodesTokenizer(
        source, Options(strict=options.strict, skip_whitespace=options.skip_whitespace)
    )

    if options.mode == "tokens":
        buf = io.StringIO()
        dump_tokens(tokenizer.tokens(), file=buf)
        return buf.getvalue(), []

    forest = tokenizer.build_forest()

    if options.mode == "tree":
        buf = io.StringIO()
        dump_forest(forest, file=buf)
        output = buf.getvalue()
    elif options.mode == "template":
        output = "".join(tokenizer.build_template(node) for node in forest)
    else:
        output = render_forest(forest)

    return output, tokenizer.repairs


def read_source(options: CliOptions) -> str:
    if options.input_file is None:
        return sys.stdin.read()
    return options.input_file.read_text(encoding="utf-8")


def report_repairs(source: str, filename: str, repairs: list[Repair]) -> None:
    """Print one warning line per repair to stderr."""
    from shortcodes.tokens import position_at

    for repair in repairs:
        pos = position_at(source, repair.position)
        print(
            f"{filename}:{pos.line}:{pos.column}: warning: {repair.describe()}",
            file=sys.stderr,
        )


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

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        source = read_source(options)
    except OSError as exc:
        print(f"error: cannot read {filename}: {exc}", file=sys.stderr)
        return 2

    try:
        output, repairs = process_source(source, options)
    except ShortcodeSyntaxError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if options.check and repairs:
        report_repairs(source, filename, repairs)
        return 1

    return 0
