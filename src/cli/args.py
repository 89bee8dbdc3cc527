from __future__ import annotations

import argparse
import sys
from typing import Sequence

from src.domain.models import ParsedArgs


class ArgumentParseError(Exception):
    """Raised by the parser instead of printing usage and exiting."""


class _QuietArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise ArgumentParseError(message)


def build_parser() -> argparse.ArgumentParser:
    """
    Recognised command-line options.

    No -h/--help: the surface is exactly these flags. Value flags accept zero or one
    value so a missing value leaves the option unset instead of aborting.
    """
    parser = _QuietArgumentParser(prog="quantumtrader", add_help=False, allow_abbrev=False)
    parser.add_argument("-v", "--verbose", action="store_true", default=None)
    parser.add_argument("-i", "--input", nargs="?", default=None, const=None)
    parser.add_argument("-o", "--output", nargs="?", default=None, const=None)
    parser.add_argument("-c", "--config", nargs="?", default=None, const=None)
    return parser


def _first_rejected(parser: argparse.ArgumentParser, tokens: list[str]) -> int:
    """Index of the token that makes the vector unparseable (shortest failing prefix)."""
    for end in range(1, len(tokens) + 1):
        try:
            parser.parse_known_args(tokens[:end])
        except ArgumentParseError:
            return end - 1
    return len(tokens) - 1


def parse_args(argv: Sequence[str] | None = None) -> ParsedArgs:
    """
    Parse process arguments (program name excluded) into ParsedArgs.

    Unrecognised tokens never abort parsing; they are returned in `unknown` so the
    caller can warn about them. A malformed token (e.g. `-vx`, `--verbose=1`) is moved
    to `unknown` on its own and the rest of the vector is parsed again, so recognised
    flags around it are kept.
    """
    parser = build_parser()
    remaining = list(sys.argv[1:] if argv is None else argv)
    rejected: list[str] = []

    while True:
        try:
            ns, extras = parser.parse_known_args(remaining)
            break
        except ArgumentParseError:
            rejected.append(remaining.pop(_first_rejected(parser, remaining)))

    return ParsedArgs(
        verbose=ns.verbose,
        input=ns.input,
        output=ns.output,
        config=ns.config,
        unknown=tuple(rejected + extras),
    )
