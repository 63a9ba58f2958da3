from .responses import error_response
from .timestamps import (
    UTC,
    compact_timestamp,
    now_iso_timestamp,
    parse_iso_timestamp,
    to_iso_timestamp,
    utc_now,
)

__all__ = [
    "error_response",
    "UTC",
    "compact_timestamp",
    "now_iso_timestamp",
    "parse_iso_timestamp",
    "to_iso_timestamp",
    "utc_now",
]
