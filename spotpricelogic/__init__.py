from . import (
    canon,
    exceptions,
    types,
    schema,
    utils,
    validate,
    ingest,
    formats,
    analytics,
    config,
    feed,
    series,
    report,
    cli,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "schema",
    "utils",
    "validate",
    "ingest",
    "formats",
    "analytics",
    "config",
    "feed",
    "series",
    "report",
    "cli",
]
