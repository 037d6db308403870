#!/usr/bin/env python3
"""Print a few BigNumber results: sum, float approximation, square and 23^50."""

from __future__ import annotations

import argparse
import logging
import sys

from src.core.domain import format_bignumber, parse_bignumber, write_bignumber
from src.core.math import BigNumberError

DEFAULT_LEFT = "23"
DEFAULT_RIGHT = "55555555555555555555555555555555555555555557777777777"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("left", nargs="?", default=DEFAULT_LEFT)
    parser.add_argument("right", nargs="?", default=DEFAULT_RIGHT)
    parser.add_argument("--exponent", type=int, default=50)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        a = parse_bignumber(args.left)
        b = parse_bignumber(args.right)
        total = a + b
        square = b * b
        power = a.power(args.exponent)
    except (BigNumberError, ValueError) as e:
        print(f"[bignumber-demo] FAIL: {e}", file=sys.stderr)
        return 1

    print(format_bignumber(total))
    print(float(b))
    write_bignumber(square, sys.stdout)
    sys.stdout.write("\n")
    print(format_bignumber(power))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
