"""Wiring between the journal list and the mapping editor.

An `EditorSession` owns one `LogView` and one `MappingWorkflow` built on the
same admin client. It implements the two hand-offs between them: turning a
journal entry into an editor draft, and jumping from a journal entry to an
existing mapping by id.
"""
from __future__ import annotations

import logging
from typing import Optional

from .admin_api import AdminApiClient
from .log_view import LogView
from .mapping.synthesizer import synthesize_draft
from .models.log_entry import LogEntry
from .models.mapping import MappingDraft
from .workflow import MappingWorkflow

__all__ = ["EditorSession"]

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(self, client: AdminApiClient):
        self.client = client
        self.logs = LogView(client)
        self.mappings = MappingWorkflow(client)

    def create_mapping_from_log(self, entry: LogEntry) -> MappingDraft:
        """Synthesize a draft from `entry` and hand it to the editor.

        Any pending open-by-id request is dropped so it cannot replace the
        draft once the mapping collection loads.
        """
        draft = synthesize_draft(entry)
        self.mappings.cancel_open_request()
        self.mappings.adopt_draft(draft)
        logger.debug("Draft adopted from %s", draft.source_label)
        return draft

    def create_mapping_from_selected(self) -> Optional[MappingDraft]:
        entry = self.logs.selected()
        if entry is None:
            return None
        return self.create_mapping_from_log(entry)

    async def open_mapping(self, mapping_id: str) -> bool:
        """Open a mapping by id, loading the collection first when needed."""
        if self.mappings.open_by_id(mapping_id):
            return True
        await self.mappings.load()
        return self.mappings.open_request is None and self.mappings.state.mapping_id == mapping_id
