from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import NoReturn

from .emitter import generate
from .errors import UsageError

USAGE = "Usage: policygen <full path of desired output file>"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="policygen",
        allow_abbrev=False,
        description="Export the Mojaloop default Anchore policy bundle as JSON.",
    )
    parser.add_argument(
        "output",
        nargs="*",
        metavar="OUTPUT",
        help="Full path of the policy file to write; an existing file is overwritten.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default="WARN",
        help="Logging level (logs go to stderr).",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    # Unrecognised tokens such as "-policy.json" are output paths as well.
    args, extra = _build_parser().parse_known_args(argv)
    paths = [*args.output, *extra]
    if len(paths) != 1:
        raise UsageError(f"expected exactly one output path, got {len(paths)}")
    args.output = paths[0]
    return args


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except UsageError as exc:
        print(USAGE, file=sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, args.log_level.upper()))
    print(f"Exporting policy path: {args.output}")
    generate(args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
