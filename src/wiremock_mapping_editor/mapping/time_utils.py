"""Timestamp lookup and display formatting for journal entries.

Journal sources are inconsistent about where (and how) they record the moment
a request was logged. This module isolates the lookup chain and the display
conversion so nothing else needs to care.

Lookup chain (first non-null wins):
    entry.loggedDate
    entry.timestamp
    entry.request.loggedDate
    entry.request.timestamp
    entry.loggedDateString

Display rules:
    missing / falsy value          -> ""
    int or float                   -> epoch milliseconds, local time, strftime(fmt)
    canonical decimal string       -> same as numeric
    anything else                  -> str(value), unchanged

Formatting never raises: values outside the platform's datetime range fall
back to their string form.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..models.log_entry import LogEntry

__all__ = [
    "DEFAULT_DISPLAY_FORMAT",
    "display_time",
    "epoch_ms_to_local",
    "format_timestamp",
    "resolve_raw_timestamp",
]

DEFAULT_DISPLAY_FORMAT = "%c"

# Matches what a number prints back as: no leading zeros, no trailing
# fractional zeros, no exponent, no surrounding noise.
_CANONICAL_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d*[1-9])?")


def resolve_raw_timestamp(raw: Mapping[str, Any]) -> Any:
    """Return the first non-null timestamp value from a raw journal entry, else None."""
    request = raw.get("request")
    if not isinstance(request, Mapping):
        request = {}
    for candidate in (
        raw.get("loggedDate"),
        raw.get("timestamp"),
        request.get("loggedDate"),
        request.get("timestamp"),
        raw.get("loggedDateString"),
    ):
        if candidate is not None:
            return candidate
    return None


def epoch_ms_to_local(ms: float) -> datetime:
    """Convert epoch milliseconds to a timezone-aware datetime in local time."""
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc).astimezone()


def _as_epoch_ms(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        s = value.strip()
        if _CANONICAL_NUMBER.fullmatch(s):
            return float(s)
    return None


def format_timestamp(value: Any, fmt: str = DEFAULT_DISPLAY_FORMAT) -> str:
    """Format a raw timestamp value for display.

    Args:
        value: Raw value as found by `resolve_raw_timestamp`
        fmt: strftime pattern; the default ``%c`` is the locale's date-time form

    Returns:
        Display string; ``""`` when no usable value is present
    """
    if not value:
        return ""
    ms = _as_epoch_ms(value)
    if ms is None:
        return str(value)
    try:
        return epoch_ms_to_local(ms).strftime(fmt)
    except (OverflowError, OSError, ValueError):
        return str(value)


def display_time(entry: "LogEntry", fmt: str = DEFAULT_DISPLAY_FORMAT) -> str:
    return format_timestamp(entry.raw_timestamp, fmt)
