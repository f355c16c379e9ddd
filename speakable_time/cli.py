"""Describe dates relative to now.

Dates come from the command line, or one per line on stdin:

    $ date -R | speakable-time --format fancy --top 2
    0s
    $ speakable-time 1978-04-06T06:00Z --now 2024-01-07T06:00Z --top 3
    45 years, 9 months and 1 day ago
"""

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path

from dateutil import parser as date_parser
from dateutil.tz import tzlocal

from speakable_time.boundary import TimeBoundary
from speakable_time.core import Approximator
from speakable_time.errors import SpeakableTimeError
from speakable_time.filters import ApproximateFilter, Relative, Round, TopRounds
from speakable_time.formats import CoarseRoundFormat, FancyDurationFormat, FormatGenerator
from speakable_time.loader import default_translator, load_locales, pick_locale
from speakable_time.log import get_logger
from speakable_time.settings import Settings
from speakable_time.translator import Translator

logger = get_logger(__name__)

GENERATORS: dict[str, type[FormatGenerator]] = {
    "coarse": CoarseRoundFormat,
    "fancy": FancyDurationFormat,
}


def parse_moment(text: str) -> datetime:
    """Parse a date string; naive results are taken as local time."""
    moment = date_parser.parse(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tzlocal())
    return moment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speakable-time",
        description="Print how long ago (or how far ahead) each date is.",
    )
    parser.add_argument("dates", nargs="*", help="dates to describe (default: read stdin)")
    parser.add_argument("-f", "--format", choices=sorted(GENERATORS), default="coarse")
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument(
        "-t", "--top", type=int, default=4, help="keep the N coarsest units (default 4)"
    )
    selection.add_argument(
        "-r",
        "--round",
        action="append",
        type=TimeBoundary.parse,
        metavar="UNIT",
        help="report in this unit; repeatable (year, month, week, day, ...)",
    )
    parser.add_argument(
        "--absolute", action="store_true", help="omit the ago/in direction marker"
    )
    parser.add_argument("-l", "--locale", help="locale tag (default: configured locale)")
    parser.add_argument("--locales-dir", help="directory of <locale>.yml tables")
    parser.add_argument("--now", type=parse_moment, help="reference instant (default: now)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def build_approximator(args: argparse.Namespace) -> Approximator:
    filters: list[ApproximateFilter] = (
        [Round(b) for b in args.round] if args.round else [TopRounds(args.top)]
    )
    if not args.absolute:
        filters.append(Relative())

    if args.locales_dir:
        registry = load_locales(Path(args.locales_dir))
        translator = Translator(registry, args.locale or pick_locale(Settings(), registry))
    else:
        translator = default_translator()
    return Approximator(GENERATORS[args.format](), *filters, translator=translator)


def _lines(dates: Sequence[str]) -> Iterable[str]:
    if dates:
        yield from dates
        return
    for line in sys.stdin:
        if line.strip():
            yield line.strip()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        format="%(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        approximator = build_approximator(args)
    except (ValueError, SpeakableTimeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    now = args.now or datetime.now(tzlocal())
    status = 0
    for text in _lines(args.dates):
        try:
            moment = parse_moment(text)
            print(approximator.difference(moment, now, args.locale))
        except (ValueError, OverflowError, SpeakableTimeError) as e:
            logger.debug("date_failed", date=text, error=str(e))
            print(f"error: {text!r}: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
