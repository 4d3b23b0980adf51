"""Pydantic models for stub mappings and mapping drafts.

`StubMapping` mirrors the subset of the WireMock mapping document this tool
reads or writes. Mappings fetched from the server also keep the document
exactly as received, so opening one in the editor shows (and a later PUT
sends) the server's own key order, nulls and unmodelled keys. A document the
models cannot validate still loads, with only its id and name read.
"""
from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

__all__ = [
    "MappingDraft",
    "RequestPattern",
    "ResponseDefinition",
    "StubMapping",
    "normalize_mappings",
]

logger = logging.getLogger(__name__)


class RequestPattern(BaseModel):
    model_config = ConfigDict(extra="allow")

    method: Optional[str] = None
    url: Optional[str] = None
    urlPath: Optional[str] = None
    urlPattern: Optional[str] = None
    urlPathPattern: Optional[str] = None
    # name -> matcher, e.g. {"status": {"equalTo": "open"}}
    queryParameters: Optional[Dict[str, Any]] = None


class ResponseDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: int = 200
    headers: Optional[Dict[str, Any]] = None
    body: Optional[str] = None
    jsonBody: Optional[Any] = None


class StubMapping(BaseModel):
    """A stub rule. `id` is only present once the server has stored it."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None
    priority: Optional[int] = None
    request: RequestPattern = Field(default_factory=RequestPattern)
    response: ResponseDefinition = Field(default_factory=ResponseDefinition)

    # Server document as fetched; None for mappings built locally.
    _document: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "StubMapping":
        """Wrap a server document. Never raises on an unexpected shape."""
        raw = dict(doc)
        try:
            mapping = cls.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Mapping %s does not match the expected shape (%d error(s)); showing it as-is",
                raw.get("id"),
                e.error_count(),
            )
            mapping = cls(id=_opt_str(raw.get("id")), name=_opt_str(raw.get("name")))
        mapping._document = raw
        return mapping

    def to_document(self) -> Dict[str, Any]:
        """Plain JSON-ready dict.

        The fetched document is returned unchanged when there is one; locally
        built mappings leave unset optional fields out.
        """
        if self._document is not None:
            return copy.deepcopy(self._document)
        return self.model_dump(exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_document(), indent=indent, ensure_ascii=False)

    @property
    def title(self) -> str:
        req = self.request
        target = req.url or req.urlPattern or req.urlPath or req.urlPathPattern or "?"
        return f"{req.method or '?'} {target}"

    @property
    def label(self) -> str:
        return f"{self.name}  |  {self.title}" if self.name else self.title


class MappingDraft(BaseModel):
    """An unsaved mapping document plus where it came from.

    Frozen: a draft is handed to the editor once and never edited in place.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    source_label: Optional[str] = None


def _opt_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def normalize_mappings(payload: Any) -> List[StubMapping]:
    """Parse the ``mappings`` array of a list response, skipping non-object items."""
    items = payload.get("mappings") if isinstance(payload, Mapping) else None
    if not isinstance(items, list):
        return []
    return [StubMapping.from_document(it) for it in items if isinstance(it, Mapping)]
