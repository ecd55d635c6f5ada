"""CLI entry-point: ``python -m tweetthief USERNAME [COUNT]``."""

from __future__ import annotations

import argparse
import logging
import sys

from tweetthief import config
from tweetthief.pipeline import ScanError, run_scan, setup_logging
from tweetthief.report import render_report

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tweetthief",
        description="Looks for stolen tweets.",
    )
    parser.add_argument(
        "username",
        nargs="?",
        help=(
            "The username to scan. This could be your own, or the username "
            "of a suspected thief."
        ),
    )
    parser.add_argument(
        "count",
        nargs="?",
        type=_positive_int,
        default=config.DEFAULT_COUNT,
        help=(
            "The count of tweets to scan "
            f"(default: the most recent {config.DEFAULT_COUNT})."
        ),
    )

    args = parser.parse_args(argv)

    if not args.username:
        parser.print_help()
        sys.exit(1)

    setup_logging()
    print(f"Scanning last {args.count} tweets in timeline for @{args.username}\n")

    try:
        report = run_scan(args.username, args.count)
    except ScanError:
        logger.exception("Failed")
        sys.exit(1)

    print(render_report(report))


if __name__ == "__main__":
    main()
