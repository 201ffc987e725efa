"""
Command line entry point.

    spotprice --zone SE3 [--date YYYY-MM-DD] [--sorted] [--charging 2h|4h|8h] [--help]

Argument problems are reported on stdout and never change the exit status.
"""

from __future__ import annotations

import logging
import re
import sys
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

import pandas as pd

from . import canon, exceptions, report, series, utils
from .config import AppConfig, config_from_env, default_config
from .feed import ElprisClient, PriceFeed
from .types import Zone

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
CHARGING_PATTERN = re.compile(r"(\d+)h?")


@dataclass
class RunOptions:
    day: date
    zone: Optional[Zone] = None
    explicit_date: bool = False
    charging: Optional[int] = None
    sorted: bool = False


@dataclass
class ParseResult:
    options: RunOptions
    error: Optional[exceptions.ArgumentError] = None
    help_requested: bool = False
    unparsed: list[str] = field(default_factory=list)


def parse_date(text: str) -> date:
    text = text.strip()
    if not DATE_PATTERN.fullmatch(text):
        raise exceptions.InvalidDate(f"invalid date: {text}")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise exceptions.InvalidDate(f"invalid date: {text}") from None


def parse_charging(text: str) -> int:
    text = text.strip()
    m = CHARGING_PATTERN.fullmatch(text)
    if m is None or int(m.group(1)) not in canon.CHARGING_DURATIONS:
        raise exceptions.InvalidChargingDuration(f"Not a valid charging time: {text}")
    return int(m.group(1))


def parse_args(argv: Sequence[str], today: date) -> ParseResult:
    """
    Interpret ``argv`` left to right.

    The first bad argument ends processing: it is kept as ``error`` and the
    remaining arguments are returned untouched in ``unparsed``.
    """
    result = ParseResult(options=RunOptions(day=today))
    opts = result.options
    args = list(argv)
    i = 0
    while i < len(args):
        flag = args[i]
        try:
            if flag in ("--zone", "--date", "--charging"):
                if i + 1 >= len(args):
                    raise exceptions.ArgumentError(f"missing value for {flag}")
                value = args[i + 1]
                if flag == "--zone":
                    opts.zone = Zone.parse(value)
                elif flag == "--date":
                    opts.day = parse_date(value)
                    opts.explicit_date = True
                else:
                    opts.charging = parse_charging(value)
                i += 2
                continue
            if flag == "--sorted":
                opts.sorted = True
            elif flag == "--help":
                result.help_requested = True
            else:
                raise exceptions.UnknownArgument(f"unknown input: {flag}")
        except exceptions.ArgumentError as e:
            result.error = e
            result.unparsed = args[i:]
            break
        i += 1
    return result


def run(
    argv: Sequence[str],
    *,
    feed: Optional[PriceFeed] = None,
    config: Optional[AppConfig] = None,
    now: Optional[pd.Timestamp] = None,
    out: Callable[[str], None] = print,
) -> int:
    """Parse arguments, fetch prices, print the report. Always returns 0."""
    cfg = config or default_config()
    tz = cfg.feed.tz
    now_ts = pd.Timestamp.now(tz=tz) if now is None else pd.Timestamp(now)
    if now_ts.tzinfo is None:
        now_ts = now_ts.tz_localize(tz)

    parsed = parse_args(argv, today=now_ts.date())
    if parsed.help_requested:
        for line in report.USAGE:
            out(line)
    if parsed.error is not None:
        logger.debug(f"Stopped argument processing at {parsed.unparsed!r}")
        out(str(parsed.error))

    opts = parsed.options
    zone = opts.zone
    if zone is None:
        zone = Zone(canon.DEFAULT_ZONE)
        for line in report.USAGE:
            out(line)

    owns_client = feed is None
    client = ElprisClient(cfg.feed) if owns_client else feed
    try:
        try:
            df = series.build_series(
                client,
                zone,
                opts.day,
                now_relative=not opts.explicit_date,
                now=now_ts,
                tz=tz,
            )
        except exceptions.DataUnavailable as e:
            logger.warning(str(e))
            df = utils.empty_price_frame(tz)
        except exceptions.SpotPriceError as e:
            logger.error(f"Could not build price series: {e}")
            df = utils.empty_price_frame(tz)

        try:
            lines = report.render(
                df, charging=opts.charging, sorted_=opts.sorted, fmt=cfg.fmt
            )
        except exceptions.CanonError as e:
            logger.error(f"Could not analyse price series: {e}")
            lines = [report.NO_PRICES]
        for line in lines:
            out(line)
    finally:
        if owns_client:
            client.close()
    return 0


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        cfg = config_from_env()
    except ValueError as e:
        print(e)
        cfg = default_config()
    configure_logging(cfg.log_level)
    return run(sys.argv[1:] if argv is None else argv, config=cfg)
