"""Command-line dice roller.

Rolls every die given in compact notation and prints one line per die,
optionally reducing each die's rolls with an aggregate function.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .dice import SeededRandomSource, SystemRandomSource, roll_lines
from .errors import BatchParseError, DiceError
from .models import AGGREGATE_NAMES, RandomSource
from .parser import parse_aggregate


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rolldice",
        description="Roll dice using compact notation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rolldice d20                 # Roll a d20
  rolldice 3d6 2d4             # Roll 3d6 and 2d4, print every roll
  rolldice 4d6 -a sum          # Roll 4d6 and print the total
  rolldice 10d10 -a avg        # Mean of ten d10 rolls
  rolldice 3d6 --seed 7        # Reproducible rolls
        """,
    )
    parser.add_argument(
        "dice",
        nargs="*",
        help="Dice to roll, e.g. d6, 5d10",
    )
    parser.add_argument(
        "-a",
        "--aggregate",
        metavar="{" + ",".join(AGGREGATE_NAMES) + "}",
        help="Aggregate function applied to the rolls of each die",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument(
        "--log-level",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Logging verbosity",
    )
    return parser


def main(argv: Sequence[str] | None = None, rng: RandomSource | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        selector = parse_aggregate(args.aggregate) if args.aggregate is not None else None
    except DiceError as ex:
        logger.error(str(ex))
        return 1

    if not args.dice:
        logger.warning("Provide some dice to roll")
        return 0

    if rng is None:
        rng = SeededRandomSource(args.seed) if args.seed is not None else SystemRandomSource()

    try:
        lines = roll_lines(args.dice, selector, rng)
    except BatchParseError as ex:
        for err in ex.errors:
            logger.error(str(err))
        return 1
    except DiceError as ex:
        logger.error(str(ex))
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
