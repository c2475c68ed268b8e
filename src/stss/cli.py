"""``stss`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .errors import STSSError
from .imports import EXTENSION
from .render import render


def default_output(in_file: str) -> str:
    """``app.stss`` -> ``app.tss`` next to the input."""
    base, ext = os.path.splitext(in_file)
    if ext == EXTENSION:
        return base + ".tss"
    return in_file + ".tss"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stss",
        description="Compile .stss files to Titanium Alloy .tss files.",
        epilog="example: stss stss/app.stss tss/app.tss",
    )
    parser.add_argument("input", help="input .stss file")
    parser.add_argument("output", nargs="?", help="output .tss file")
    parser.add_argument("-o", "--output", dest="output_opt", metavar="FILE",
                        help="output .tss file (overrides the positional output)")
    parser.add_argument("-I", "--include-path", action="append", default=None, metavar="DIR",
                        help="directory to look for @import-ed files (repeatable, default: cwd)")
    parser.add_argument("-s", "--shorthand", metavar="FILE",
                        help="JSON file containing additional shorthand notations")
    parser.add_argument("--stdout", action="store_true",
                        help="print the resulting TSS to stdout instead of writing a file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print the output of every conversion step")
    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        # --help exits 0; usage errors map to 1 like every other failure
        return 0 if exc.code in (0, None) else 1
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    out_file = None
    if not args.stdout:
        out_file = args.output_opt or args.output or default_output(args.input)
    include_paths = args.include_path or [os.getcwd()]

    def on_stage(stage: str, text: str) -> None:
        print(f"> {stage.upper()}:\n{text}\n", file=sys.stderr)

    def on_success(result: str) -> None:
        if args.stdout:
            print(result)
        else:
            print(f"TSS successfully generated to {result}", file=sys.stderr)

    errors: list[Exception] = []
    render(
        file=args.input,
        out_file=out_file,
        shorthand_file=args.shorthand,
        include_paths=include_paths,
        success=on_success,
        error=errors.append,
        on_stage=on_stage if args.verbose else None,
    )
    if errors:
        exc = errors[0]
        kind = "" if isinstance(exc, STSSError) else f"{type(exc).__name__}: "
        print(f"Error: {kind}{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
