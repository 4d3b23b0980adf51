"""Mapping editor state and the save protocol.

`MappingWorkflow` owns one `EditorState` and the most recently loaded mapping
collection. State changes happen only through explicit transitions:

    select(mapping)       edit an existing mapping, drop any pending draft
    adopt_draft(draft)    compose a new mapping from a synthesized draft
    open_by_id(id)        select a mapping by id once the collection has it
    save()                parse -> apply name -> create/update -> persist -> reload
    delete(id)            remove -> persist -> reload

Save Protocol:
    1. Editor text (blank means "{}") must parse to a JSON object, otherwise
       ParseError and nothing is sent.
    2. A non-blank trimmed name overwrites "name"; a blank one removes it.
    3. A tracked id means PUT /mappings/{id}, no id means POST /mappings.
       Non-2xx -> DispatchError, stop.
    4. POST /mappings/save. Non-2xx -> PersistError, stop. The dispatched
       change stays live in the server's memory; it is not rolled back.
    5. Reload the collection so server-assigned fields become visible.

Every failure is terminal for the call, never retried, and leaves the editor
text exactly as the user typed it.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .admin_api import AdminApiClient
from .errors import (
    AdminApiError,
    DispatchError,
    ParseError,
    PersistError,
    TransportError,
    WorkflowError,
)
from .models.mapping import MappingDraft, StubMapping, normalize_mappings

__all__ = ["EditorState", "MappingWorkflow", "name_from_text"]

logger = logging.getLogger(__name__)


@dataclass
class EditorState:
    """Editor contents. ``mapping_id is None`` means a new mapping is being composed."""

    mapping_id: Optional[str] = None
    text: str = ""
    name: str = ""

    @property
    def is_new(self) -> bool:
        return self.mapping_id is None


def name_from_text(text: str) -> str:
    try:
        obj = json.loads(text)
    except ValueError:
        return ""
    if isinstance(obj, dict) and isinstance(obj.get("name"), str):
        return obj["name"]
    return ""


class MappingWorkflow:
    def __init__(self, client: AdminApiClient):
        self._client = client
        self.state = EditorState()
        self.mappings: List[StubMapping] = []
        # Draft currently shown as the editor's provenance; cleared by select().
        self.draft: Optional[MappingDraft] = None
        self.open_request: Optional[str] = None
        self.last_error: Optional[WorkflowError] = None
        self._adopted: Optional[MappingDraft] = None

    # ---------------- Collection -----------------
    async def load(self) -> bool:
        """Fetch the mapping collection, replacing it wholesale on success.

        On failure the previous collection stays in place. A pending
        open-by-id request is retried against the fresh collection.
        """
        self.last_error = None
        try:
            payload = await self._client.list_mappings()
        except AdminApiError as e:
            self.last_error = TransportError(e)
            logger.warning("Loading mappings failed: %s", e.message)
            return False
        self.mappings = normalize_mappings(payload)
        logger.debug("Loaded %d mappings", len(self.mappings))
        self._resolve_open_request()
        return True

    def find(self, mapping_id: str) -> Optional[StubMapping]:
        for m in self.mappings:
            if m.id == mapping_id:
                return m
        return None

    # ---------------- Editor transitions -----------------
    def select(self, mapping: StubMapping) -> None:
        self.state = EditorState(
            mapping_id=mapping.id,
            text=mapping.to_json(),
            name=mapping.name or "",
        )
        self.draft = None

    def adopt_draft(self, draft: Optional[MappingDraft]) -> bool:
        """Load a draft into the editor in new-mapping mode.

        Returns False without touching the editor for an empty draft or for
        the draft object that was already adopted.
        """
        if draft is None or not draft.text:
            return False
        if draft is self._adopted:
            return False
        self._adopted = draft
        self.draft = draft
        self.state = EditorState(mapping_id=None, text=draft.text, name=name_from_text(draft.text))
        return True

    def open_by_id(self, mapping_id: str) -> bool:
        """Request that `mapping_id` be opened; True once it actually is.

        When the collection does not (yet) contain the id the request stays
        pending and is resolved by the next successful `load`.
        """
        self.open_request = mapping_id
        return self._resolve_open_request()

    def _resolve_open_request(self) -> bool:
        if self.open_request is None:
            return False
        mapping = self.find(self.open_request)
        if mapping is None:
            return False
        self.select(mapping)
        self.open_request = None
        return True

    def cancel_open_request(self) -> None:
        self.open_request = None

    def set_text(self, text: str) -> None:
        self.state.text = text

    def set_name(self, name: str) -> None:
        self.state.name = name

    # ---------------- Save protocol -----------------
    def build_document(self) -> Dict[str, Any]:
        """Parse the editor text and apply the name field. Raises ParseError."""
        try:
            doc = json.loads(self.state.text or "{}")
        except ValueError as e:
            raise ParseError(f"Invalid JSON: {e}") from e
        if not isinstance(doc, dict):
            raise ParseError("Invalid JSON: mapping must be a JSON object")
        name = self.state.name.strip()
        if name:
            doc["name"] = name
        else:
            doc.pop("name", None)
        return doc

    async def _dispatch(self, doc: Dict[str, Any]) -> None:
        mapping_id = self.state.mapping_id
        try:
            if mapping_id is not None:
                await self._client.update_mapping(mapping_id, doc)
            else:
                await self._client.create_mapping(doc)
        except AdminApiError as e:
            raise DispatchError("Update" if mapping_id is not None else "Create", e) from e

    async def _persist(self) -> None:
        try:
            await self._client.persist_mappings()
        except AdminApiError as e:
            raise PersistError(e) from e

    async def save(self) -> bool:
        """Run the save protocol. Returns True once the change is persisted.

        The outcome of the final reload does not change the return value; a
        reload failure is still reported through `last_error`.
        """
        self.last_error = None
        try:
            doc = self.build_document()
            await self._dispatch(doc)
            await self._persist()
        except WorkflowError as e:
            self.last_error = e
            logger.warning("Saving mapping failed: %s", e.message)
            return False
        logger.info(
            "%s mapping %s and persisted to disk",
            "Updated" if self.state.mapping_id is not None else "Created",
            self.state.mapping_id or doc.get("name") or "<unnamed>",
        )
        await self.load()
        return True

    async def delete(self, mapping_id: str) -> bool:
        """Remove a mapping, persist, then reload.

        When the deleted mapping is the one being edited the editor drops back
        to new-mapping mode, keeping its text.
        """
        self.last_error = None
        try:
            try:
                await self._client.delete_mapping(mapping_id)
            except AdminApiError as e:
                raise DispatchError("Delete", e) from e
            await self._persist()
        except WorkflowError as e:
            self.last_error = e
            logger.warning("Deleting mapping %s failed: %s", mapping_id, e.message)
            return False
        if self.state.mapping_id == mapping_id:
            self.state.mapping_id = None
        logger.info("Deleted mapping %s and persisted to disk", mapping_id)
        await self.load()
        return True
