#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, List

from modules.integral.core.value import integral_type, iter_integrals, write_integral
from modules.integral.core.widths import STANDARD_WIDTHS, resolve_width
from workbench.settings import configure_logging, default_width

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Read whitespace-separated integer literals (0b.., 0x.., 0.., decimal) "
            "from stdin and write one converted value per line."
        )
    )
    parser.add_argument(
        "--width",
        help="Integer width, e.g. int32 or uint8 "
        f"(one of {', '.join(width.name for width in STANDARD_WIDTHS)} or a C alias)",
    )
    parser.add_argument(
        "--radix",
        type=int,
        default=10,
        help="Output radix, 2..16; anything else prints decimal (default: 10)",
    )
    parser.add_argument("--log-level", help="Logging level (default: INTEGRAL_LOG_LEVEL or INFO)")
    return parser


def main(
    argv: List[str] | None = None,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    source = stdin if stdin is not None else sys.stdin
    sink = stdout if stdout is not None else sys.stdout

    if args.width:
        width, error = resolve_width(args.width)
        if error or width is None:
            print(error, file=sys.stderr)
            return 2
    else:
        width = default_width()

    kind = integral_type(width)
    count = 0
    for value in iter_integrals(source, kind):
        if args.radix == 10:
            write_integral(sink, value)
        else:
            sink.write(value.to_radix(args.radix))
        sink.write("\n")
        count += 1

    logger.debug("Converted %d value(s) as %s", count, width.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
