from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .api import RunOptions, run_stdio
from .errors import BFIOError, BFSyntaxError
from .parser import load_file, parse

logger = logging.getLogger(__name__)


def init_logging(*, debug: bool = False, logfile: Optional[str] = None) -> None:
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    if logfile:
        handler: logging.Handler = logging.FileHandler(logfile, mode="w", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-5s %(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)5s %(message)s"))
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        usage="bfi [OPTIONS] {-e PROGRAM | FILE}",
        description="A brainfuck interpreter. Input and output are connected to stdin/stdout.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-e", "--eval",
        metavar="PROGRAM",
        help=(
            "Provide the program on the command line rather than as an input file. "
            "A program starting with '-' must be attached, as in -e=-. or --eval=-."
        ),
    )
    source.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="Source file to run. Required unless -e is used.",
    )
    parser.add_argument("--no-flush", action="store_true", help="Do not flush stdout after every output byte")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser and engine events")
    parser.add_argument("--log-file", metavar="PATH", help="Write log records to PATH instead of stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        init_logging(debug=args.verbose, logfile=args.log_file)
    except OSError as e:
        print(f"error opening log file: {e}", file=sys.stderr)
        return 1

    try:
        if args.eval is not None:
            program = parse(os.fsencode(args.eval))
        else:
            try:
                program = load_file(args.file)
            except OSError as e:
                print(f"error opening input file: {e}", file=sys.stderr)
                return 1
    except BFSyntaxError as e:
        print(f"failed to parse program: {e}", file=sys.stderr)
        return 1

    try:
        run_stdio(program, options=RunOptions(flush_output=not args.no_flush))
    except BFIOError as e:
        print(f"IO Error: {e}", file=sys.stderr)
        return 1
    finally:
        if sys.stdout is not None:
            try:
                sys.stdout.flush()
            except OSError:
                logger.debug("stdout already closed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
