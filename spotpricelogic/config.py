from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from . import canon, formats


@dataclass
class FeedConfig:
    base_url: str = canon.FEED_BASE_URL
    timeout_s: float = canon.FEED_TIMEOUT_S
    tz: str = canon.DEFAULT_TZ


@dataclass
class FormatConfig:
    locale: str = "sv_SE"
    decimals: int = 2


@dataclass
class AppConfig:
    feed: FeedConfig = field(default_factory=FeedConfig)
    fmt: FormatConfig = field(default_factory=FormatConfig)
    log_level: str = "WARNING"


def default_config() -> AppConfig:
    return AppConfig()


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Defaults overridden by SPOTPRICE_* environment variables."""
    env = os.environ if environ is None else environ
    cfg = default_config()
    if env.get("SPOTPRICE_BASE_URL"):
        cfg.feed.base_url = env["SPOTPRICE_BASE_URL"].rstrip("/")
    if env.get("SPOTPRICE_TIMEOUT"):
        try:
            cfg.feed.timeout_s = float(env["SPOTPRICE_TIMEOUT"])
        except ValueError:
            raise ValueError(
                f"SPOTPRICE_TIMEOUT must be a number of seconds, got {env['SPOTPRICE_TIMEOUT']!r}"
            ) from None
        if not cfg.feed.timeout_s > 0:
            raise ValueError(
                f"SPOTPRICE_TIMEOUT must be positive, got {env['SPOTPRICE_TIMEOUT']!r}"
            )
    if env.get("SPOTPRICE_LOCALE"):
        cfg.fmt.locale = env["SPOTPRICE_LOCALE"]
        formats.symbols_for(cfg.fmt.locale)
    if env.get("SPOTPRICE_LOG_LEVEL"):
        cfg.log_level = env["SPOTPRICE_LOG_LEVEL"].upper()
    return cfg
