"""Stable selection keys for request journal entries.

A list view keeps the selected entry across refreshes by key, so the key must
come out identical for identical underlying data on every fetch.

Key Format:
    entry.id                                   when present
    entry.request.id                           otherwise, when present
    f"{method}|{url}|{raw_timestamp}"          otherwise

    method and url fall back to "?" (url prefers request.url over
    request.absoluteUrl); the raw timestamp falls back to "".

Known Limitation:
    Two entries without ids that share method, URL and timestamp produce the
    same key. Journal ids are present on every current WireMock release; the
    composite is a best-effort fallback only.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..models.log_entry import LogEntry

__all__ = ["KEY_DELIMITER", "MISSING_PART", "event_key"]

KEY_DELIMITER = "|"
MISSING_PART = "?"


def event_key(entry: "LogEntry") -> str:
    """Derive the selection key for a journal entry."""
    if entry.id is not None:
        return entry.id
    req = entry.request
    if req.id is not None:
        return req.id
    method = req.method if req.method is not None else MISSING_PART
    if req.url is not None:
        url = req.url
    elif req.absoluteUrl is not None:
        url = req.absoluteUrl
    else:
        url = MISSING_PART
    ts = "" if entry.raw_timestamp is None else str(entry.raw_timestamp)
    return KEY_DELIMITER.join((method, url, ts))
