"""Owned state for the request journal list.

`LogView` holds the most recently fetched entries, the free-text query and
the selected entry key. Loads replace the entry list wholesale; a failed load
keeps what was already there and records the error instead.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .admin_api import AdminApiClient
from .errors import AdminApiError, TransportError, WorkflowError
from .mapping.id_utils import event_key
from .mapping.query_filter import filter_entries
from .models.log_entry import LogEntry, normalize_log_entries

__all__ = ["LogView"]

logger = logging.getLogger(__name__)


class LogView:
    def __init__(self, client: AdminApiClient):
        self._client = client
        self.entries: List[LogEntry] = []
        self.query: str = ""
        self.selected_key: Optional[str] = None
        self.last_error: Optional[WorkflowError] = None

    async def load(self) -> bool:
        """Fetch the journal. Returns False (keeping old entries) on failure."""
        self.last_error = None
        try:
            payload = await self._client.list_requests()
        except AdminApiError as e:
            self.last_error = TransportError(e)
            logger.warning("Loading request journal failed: %s", e.message)
            return False
        self.entries = normalize_log_entries(payload)
        logger.debug("Loaded %d journal entries", len(self.entries))
        if self.selected_key is not None and self.find(self.selected_key) is None:
            self.selected_key = None
        return True

    async def reset(self) -> bool:
        """Clear the remote journal, then reload."""
        self.last_error = None
        try:
            await self._client.reset_requests()
        except AdminApiError as e:
            self.last_error = TransportError(e)
            logger.warning("Clearing request journal failed: %s", e.message)
            return False
        return await self.load()

    def visible(self) -> List[LogEntry]:
        return filter_entries(self.entries, self.query)

    def find(self, key: str) -> Optional[LogEntry]:
        for entry in self.entries:
            if event_key(entry) == key:
                return entry
        return None

    def select(self, key: Optional[str]) -> None:
        self.selected_key = key

    def selected(self) -> Optional[LogEntry]:
        if self.selected_key is None:
            return None
        return self.find(self.selected_key)
