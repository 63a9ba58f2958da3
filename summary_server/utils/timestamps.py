"""Shared helpers for producing history timestamps."""

from __future__ import annotations

from datetime import datetime, timezone

UTC = timezone.utc


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso_timestamp(dt: datetime) -> str:
    """Format *dt* as ISO-8601 UTC with millisecond precision and a ``Z`` suffix.

    Naive datetimes are treated as UTC.
    """

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso_timestamp() -> str:
    return to_iso_timestamp(utc_now())


def compact_timestamp(dt: datetime) -> str:
    """Filesystem-safe UTC stamp with milliseconds, e.g. ``20261018T091502123Z``."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return f"{dt.strftime('%Y%m%dT%H%M%S')}{dt.microsecond // 1000:03d}Z"


def parse_iso_timestamp(value: str) -> datetime:
    """Parse a timestamp written by :func:`to_iso_timestamp` (or any ISO-8601 string)."""

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


__all__ = [
    "UTC",
    "compact_timestamp",
    "now_iso_timestamp",
    "parse_iso_timestamp",
    "to_iso_timestamp",
    "utc_now",
]
