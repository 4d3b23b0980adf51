"""Free-text filter over journal entries."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..models.log_entry import LogEntry

__all__ = ["filter_entries", "serialize_entry"]


def serialize_entry(entry: "LogEntry") -> str:
    """Compact JSON of the raw payload, the text a query is matched against."""
    return json.dumps(entry.raw, ensure_ascii=False, separators=(",", ":"), default=str)


def filter_entries(entries: Sequence["LogEntry"], query: str) -> List["LogEntry"]:
    """Return entries whose serialized form contains `query`, case-insensitively.

    A blank query returns every entry. Order is preserved and a new list is
    always returned.
    """
    if not query or not query.strip():
        return list(entries)
    needle = query.lower()
    return [e for e in entries if needle in serialize_entry(e).lower()]
