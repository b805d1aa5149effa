"""Run the interactive console with ``python -m polyexpr``."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING as _TYPE_CHECKING

from polyexpr.console import Console
from polyexpr.console import ConsoleConfig

if _TYPE_CHECKING:
    from typing import Optional, Sequence


def build_parser() -> argparse.ArgumentParser:
    """Command line options for the console."""
    parser = argparse.ArgumentParser(
        prog="polyexpr",
        description="Simplify and differentiate polynomial expressions.",
    )
    parser.add_argument(
        "--max-terms",
        type=int,
        default=ConsoleConfig.max_terms,
        help="refuse expressions expanding to more products than this (0 for no limit)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level for diagnostics on stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the console script."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s:%(name)s:%(message)s"
    )
    config = ConsoleConfig(max_terms=args.max_terms or None)
    Console(config).run(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
