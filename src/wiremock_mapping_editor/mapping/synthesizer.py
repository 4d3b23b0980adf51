"""Draft stub mapping synthesis from a captured request.

Given a journal entry, produce a mapping document that matches the same
method, path and query parameters and answers with a placeholder JSON
response for the user to fill in.

Rules:
    - method defaults to GET
    - request.url is split at the FIRST '?' only; later '?' stay in the query
    - query pairs are form-decoded; for a repeated name only the first value
      is kept (an equalTo matcher expresses one expected value per name)
    - queryParameters is omitted entirely when no pair survives
    - name is "AUTO <METHOD> <path or '/'>", priority is DRAFT_PRIORITY
    - response is always 200 + JSON content type + empty jsonBody; captured
      response bodies are never copied

The function is total: malformed URLs end up as "whole string is the path".
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Tuple
from urllib.parse import parse_qsl

from ..models.mapping import MappingDraft, RequestPattern, ResponseDefinition, StubMapping

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..models.log_entry import LogEntry

__all__ = [
    "DEFAULT_METHOD",
    "DRAFT_CONTENT_TYPE",
    "DRAFT_PRIORITY",
    "build_query_matchers",
    "split_url",
    "synthesize_draft",
    "synthesize_mapping",
]

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "GET"
# Low priority so any hand-written mapping for the same request wins.
DRAFT_PRIORITY = 10
DRAFT_CONTENT_TYPE = "application/json; charset=utf-8"


def split_url(url: str) -> Tuple[str, str]:
    """Split a URL into (path, query) at the first '?'."""
    path, _sep, query = url.partition("?")
    return path, query


def build_query_matchers(query: str) -> Dict[str, Dict[str, str]]:
    """Turn a query string into ``{name: {"equalTo": value}}``, first value wins."""
    matchers: Dict[str, Dict[str, str]] = {}
    if not query:
        return matchers
    for name, value in parse_qsl(query, keep_blank_values=True):
        if name not in matchers:
            matchers[name] = {"equalTo": value}
    return matchers


def synthesize_mapping(entry: "LogEntry") -> StubMapping:
    req = entry.request
    method = req.method if req.method is not None else DEFAULT_METHOD
    full_url = req.url if req.url is not None else ""
    path, query = split_url(full_url)
    url_path = path or "/"

    request = RequestPattern(method=method, urlPath=url_path)
    matchers = build_query_matchers(query)
    if matchers:
        request.queryParameters = matchers

    return StubMapping(
        name=f"AUTO {method} {url_path}",
        priority=DRAFT_PRIORITY,
        request=request,
        response=ResponseDefinition(
            status=200,
            headers={"Content-Type": DRAFT_CONTENT_TYPE},
            jsonBody={},
        ),
    )


def synthesize_draft(entry: "LogEntry") -> MappingDraft:
    """Build the editor draft (indented JSON + provenance label) for an entry."""
    mapping = synthesize_mapping(entry)
    req = entry.request
    method = req.method if req.method is not None else DEFAULT_METHOD
    full_url = req.url if req.url is not None else ""
    logger.debug("Synthesized draft %r from %s %s", mapping.name, method, full_url)
    return MappingDraft(text=mapping.to_json(), source_label=f"{method} {full_url}")
