"""Command-line interface for minimark."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from minimark.errors import LexError, ParseError
from minimark.tokens import LexerOptions, LexMode

CONFIG_NAME = "minimark.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    lexer: LexerOptions
    watch: bool
    debug: bool
    tokens: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="minimark",
        description="Convert minimark documents to HTML",
    )
    p.add_argument("input", help="Input markdown file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--permissive",
        action="store_true",
        help="Let text runs absorb spaces instead of lexing them separately",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("--tokens", action="store_true", help="Dump tokens to stderr")
    return p


def parse_mode_arg(s: str) -> LexMode:
    """Parse a lexer mode name from the config file."""
    try:
        return LexMode(s)
    except ValueError:
        choices = ", ".join(m.value for m in LexMode)
        raise argparse.ArgumentTypeError(
            f"invalid lexer mode {s!r} (expected one of: {choices})"
        ) from None


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file.

    An auto-discovered config that does not exist yields an empty dict; an
    explicit path that does not exist is an error.
    """
    if config_path is not None:
        if not config_path.is_file():
            raise argparse.ArgumentTypeError(f"config file not found: {config_path}")
        path = config_path
    else:
        path = input_dir / CONFIG_NAME
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

    # Lexer mode: config < CLI
    mode = LexMode.STRICT
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_mode = cfg_lexer.get("mode")
        if cfg_mode is not None:
            mode = parse_mode_arg(str(cfg_mode))
    if args.permissive:
        mode = LexMode.PERMISSIVE

    # Output file: config < CLI
    output_file: Path | None = None
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_file = cfg_output.get("file")
        if isinstance(cfg_file, str):
            output_file = input_dir / cfg_file
    if args.output:
        output_file = Path(args.output)

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        lexer=LexerOptions(mode=mode),
        watch=args.watch,
        debug=args.debug,
        tokens=args.tokens,
    )


def compile_file(options: CliOptions) -> str:
    """Read, parse, and render a minimark file to HTML."""
    from minimark.debug import dump_ast, dump_tokens
    from minimark.lexer import tokenize
    from minimark.parser import parse
    from minimark.render import render

    source = options.input_file.read_text(encoding="utf-8")

    if options.tokens:
        dump_tokens(tokenize(source, options.lexer), file=sys.stderr)

    doc = parse(source, options.lexer)

    if options.debug:
        dump_ast(doc, file=sys.stderr)

    return render(doc)


def _write_output(options: CliOptions, html: str) -> None:
    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
        sys.stdout.flush()


def _decode_error(options: CliOptions, exc: UnicodeDecodeError) -> str:
    return f"error: cannot decode {options.input_file} as UTF-8: {exc.reason} at byte {exc.start}"


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
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
                    _write_output(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except (LexError, ParseError) as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
                except UnicodeDecodeError as exc:
                    print(_decode_error(options, exc), file=sys.stderr)
                except OSError as exc:
                    print(
                        f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr
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
        html = compile_file(options)
    except (LexError, ParseError) as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot read {options.input_file}: {exc.strerror}", file=sys.stderr)
        return 2
    except UnicodeDecodeError as exc:
        print(_decode_error(options, exc), file=sys.stderr)
        return 2

    _write_output(options, html)
    return 0
