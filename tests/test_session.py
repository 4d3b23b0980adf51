from __future__ import annotations

import json

import pytest

from wiremock_mapping_editor.models.log_entry import normalize_log_entry
from wiremock_mapping_editor.session import EditorSession

pytestmark = pytest.mark.asyncio


async def test_log_entry_to_saved_mapping(client, fake_admin):
    fake_admin.requests = [{"id": "e1", "request": {"method": "POST", "url": "/items?sort=asc"}}]
    session = EditorSession(client)
    await session.logs.load()
    session.logs.select("e1")
    draft = session.create_mapping_from_selected()
    assert draft is not None
    assert draft.source_label == "POST /items?sort=asc"
    assert session.mappings.state.is_new
    assert session.mappings.state.name == "AUTO POST /items"

    assert await session.mappings.save()
    created = fake_admin.mappings[0]
    assert created["request"]["queryParameters"] == {"sort": {"equalTo": "asc"}}
    assert [m.name for m in session.mappings.mappings] == ["AUTO POST /items"]


async def test_create_from_log_cancels_pending_open(client, fake_admin):
    fake_admin.mappings = [{"id": "m-1", "request": {"method": "GET", "url": "/x"}}]
    session = EditorSession(client)
    session.mappings.open_by_id("m-1")
    session.create_mapping_from_log(normalize_log_entry({"request": {"method": "GET", "url": "/y"}}))
    await session.mappings.load()
    assert session.mappings.state.is_new
    assert json.loads(session.mappings.state.text)["name"] == "AUTO GET /y"


async def test_open_mapping_loads_when_needed(client, fake_admin):
    fake_admin.mappings = [{"id": "m-1", "name": "One", "request": {"method": "GET", "url": "/x"}}]
    session = EditorSession(client)
    assert await session.open_mapping("m-1") is True
    assert session.mappings.state.mapping_id == "m-1"
    assert await session.open_mapping("missing") is False


async def test_nothing_selected_gives_no_draft(client):
    session = EditorSession(client)
    assert session.create_mapping_from_selected() is None
