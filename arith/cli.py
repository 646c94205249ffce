#!/usr/bin/env python3
"""
cli.py

Run expression commands from a file or from the command line.

Usage examples:
    arith                                  # input.txt -> output.txt
    arith --input cmds.txt --output -      # results to stdout
    arith "parse 2+3*4" "evaluate"
    arith "load_prf +(a,!(3))" save_pst "evaluate a=1"
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from .session import Session

# ---------------- CONFIG ---------------- #
DEFAULT_INPUT = "input.txt"
DEFAULT_OUTPUT = "output.txt"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
# ---------------------------------------- #

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="arith", description="Parse, print and evaluate integer expressions.")
    ap.add_argument("commands", nargs="*", help="command lines to run; results go to stdout")
    ap.add_argument("--input", default=DEFAULT_INPUT, help="command file read when no commands are given")
    ap.add_argument("--output", default=DEFAULT_OUTPUT, help="result file, or '-' for stdout")
    ap.add_argument("-v", "--verbose", action="store_true", help="log debug messages to stderr")
    return ap


def _write(lines, out) -> None:
    for line in lines:
        out.write(line + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)
    session = Session()

    if args.commands:
        _write(session.run(args.commands), sys.stdout)
        return 0

    if not os.path.exists(args.input):
        print(f"can't open file {args.input}", file=sys.stderr)
        return 1

    logger.debug("reading commands from %s", args.input)
    with open(args.input, "r", encoding="utf-8") as f:
        if args.output == "-":
            _write(session.run(f), sys.stdout)
        else:
            with open(args.output, "w", encoding="utf-8") as out:
                _write(session.run(f), out)
    return 0
