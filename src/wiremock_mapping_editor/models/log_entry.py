"""Canonical model for captured request journal entries.

The admin API returns journal entries whose shape is not fully under our
control: identifiers may be missing, the timestamp may live under one of
several keys, and the URL may only be available as an absolute URL. All of
that variation is absorbed here. `normalize_log_entry` is the single place
raw payloads are read; everything downstream (identity, display time, draft
synthesis, filtering) works on the frozen `LogEntry` record.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..mapping.time_utils import resolve_raw_timestamp

__all__ = ["LogEntry", "LoggedRequest", "normalize_log_entry", "normalize_log_entries"]


class LoggedRequest(BaseModel):
    """The request half of a captured pair."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    absoluteUrl: Optional[str] = None


class LogEntry(BaseModel):
    """A captured request/response pair in canonical form.

    `raw_timestamp` is the unformatted value found through the lookup chain in
    `mapping.time_utils`; `raw` keeps the payload exactly as received for
    free-text search.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    request: LoggedRequest = Field(default_factory=LoggedRequest)
    response: Dict[str, Any] = Field(default_factory=dict)
    raw_timestamp: Any = None
    raw: Dict[str, Any] = Field(default_factory=dict)


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def normalize_log_entry(raw: Any) -> LogEntry:
    """Build a `LogEntry` from any raw journal payload. Never raises.

    Non-mapping payloads (or a non-mapping ``request``) degrade to empty
    sections rather than failing, so one odd entry cannot break a list view.
    """
    if not isinstance(raw, Mapping):
        return LogEntry()
    req = raw.get("request")
    if not isinstance(req, Mapping):
        req = {}
    resp = raw.get("response")
    return LogEntry(
        id=_opt_str(raw.get("id")),
        request=LoggedRequest(
            id=_opt_str(req.get("id")),
            method=_opt_str(req.get("method")),
            url=_opt_str(req.get("url")),
            absoluteUrl=_opt_str(req.get("absoluteUrl")),
        ),
        response=dict(resp) if isinstance(resp, Mapping) else {},
        raw_timestamp=resolve_raw_timestamp(raw),
        raw=dict(raw),
    )


def normalize_log_entries(payload: Any) -> List[LogEntry]:
    """Extract and normalize the ``requests`` array of a journal response."""
    items = payload.get("requests") if isinstance(payload, Mapping) else None
    if not isinstance(items, list):
        return []
    return [normalize_log_entry(it) for it in items]
