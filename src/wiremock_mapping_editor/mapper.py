"""Public facade for journal-entry to draft-mapping conversion.

This module is the stable import surface for callers holding raw journal
payloads. It normalizes the payload once and delegates to the pure helpers in
the `wiremock_mapping_editor.mapping` package.

Public Functions:
    draft_from_log_entry: raw or canonical entry -> MappingDraft
    mapping_from_log_entry: raw or canonical entry -> StubMapping document model

Re-exports:
    event_key, display_time, filter_entries, normalize_log_entry
"""
from __future__ import annotations

from typing import Any, Union

from .mapping.id_utils import event_key
from .mapping.query_filter import filter_entries
from .mapping.synthesizer import synthesize_draft, synthesize_mapping
from .mapping.time_utils import display_time
from .models.log_entry import LogEntry, normalize_log_entry
from .models.mapping import MappingDraft, StubMapping

__all__ = [
    "draft_from_log_entry",
    "mapping_from_log_entry",
    "display_time",
    "event_key",
    "filter_entries",
    "normalize_log_entry",
]


def _canonical(entry: Union[LogEntry, Any]) -> LogEntry:
    if isinstance(entry, LogEntry):
        return entry
    return normalize_log_entry(entry)


def draft_from_log_entry(entry: Union[LogEntry, Any]) -> MappingDraft:
    """Synthesize an editor draft from a journal entry.

    Args:
        entry: A canonical `LogEntry` or the raw dict returned by the journal

    Returns:
        MappingDraft with indented JSON text and a ``"<method> <url>"`` label
    """
    return synthesize_draft(_canonical(entry))


def mapping_from_log_entry(entry: Union[LogEntry, Any]) -> StubMapping:
    return synthesize_mapping(_canonical(entry))
