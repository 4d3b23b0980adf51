from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from wiremock_mapping_editor import __main__ as cli
from wiremock_mapping_editor.admin_api import AdminApiClient

runner = CliRunner()


@pytest.fixture
def wired(monkeypatch, fake_admin):
    monkeypatch.setattr(
        cli,
        "_make_client",
        lambda settings: AdminApiClient(
            "http://wiremock.test/api", transport=httpx.MockTransport(fake_admin.handler)
        ),
    )
    fake_admin.requests = [
        {"id": "e1", "request": {"method": "GET", "url": "/orders?status=open", "loggedDate": 1700000000000}},
        {"id": "e2", "request": {"method": "POST", "url": "/items"}},
    ]
    return fake_admin


def test_logs_lists_and_filters(wired):
    result = runner.invoke(cli.app, ["logs", "--query", "items"])
    assert result.exit_code == 0, result.output
    assert "POST\t/items\te2" in result.output
    assert "e1" not in result.output
    assert "1 of 2 request(s)" in result.output


def test_draft_to_file_then_save(wired, tmp_path):
    out = tmp_path / "draft.json"
    result = runner.invoke(cli.app, ["draft", "e1", "--out", str(out)])
    assert result.exit_code == 0, result.output
    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["request"]["queryParameters"] == {"status": {"equalTo": "open"}}

    result = runner.invoke(cli.app, ["save", str(out)])
    assert result.exit_code == 0, result.output
    assert wired.mappings[0]["name"] == "AUTO GET /orders"
    assert wired.persist_count == 1


def test_draft_unknown_key(wired):
    result = runner.invoke(cli.app, ["draft", "nope"])
    assert result.exit_code == 1
    assert "No journal entry" in result.output


def test_save_existing_with_name_override(wired, tmp_path):
    wired.mappings = [{"id": "m-1", "name": "Old", "request": {"method": "GET", "urlPath": "/a"}}]
    doc_file = tmp_path / "m.json"
    doc_file.write_text('{"name": "Old", "request": {"method": "GET", "urlPath": "/b"}}', encoding="utf-8")
    result = runner.invoke(cli.app, ["save", str(doc_file), "--id", "m-1", "--name", "New"])
    assert result.exit_code == 0, result.output
    assert wired.calls_to("POST", "/mappings") == []
    assert wired.mappings == [{"name": "New", "request": {"method": "GET", "urlPath": "/b"}, "id": "m-1"}]


def test_save_reports_parse_error(wired, tmp_path):
    doc_file = tmp_path / "bad.json"
    doc_file.write_text("{oops", encoding="utf-8")
    result = runner.invoke(cli.app, ["save", str(doc_file)])
    assert result.exit_code == 1
    assert "Invalid JSON" in result.output
    assert wired.calls == []


def test_save_reports_persist_error(wired, tmp_path):
    wired.fail("POST", "/mappings/save", 500)
    doc_file = tmp_path / "m.json"
    doc_file.write_text("{}", encoding="utf-8")
    result = runner.invoke(cli.app, ["save", str(doc_file)])
    assert result.exit_code == 1
    assert "Save-to-disk failed: HTTP 500" in result.output


def test_mappings_show_and_delete(wired):
    wired.mappings = [{"id": "m-1", "name": "One", "request": {"method": "GET", "urlPath": "/a"}}]
    result = runner.invoke(cli.app, ["mappings"])
    assert "One  |  GET /a\tm-1" in result.output

    result = runner.invoke(cli.app, ["show", "m-1"])
    assert result.exit_code == 0
    assert json.loads(result.output)["name"] == "One"

    result = runner.invoke(cli.app, ["delete", "m-1"])
    assert result.exit_code == 0
    assert wired.mappings == []


def test_show_missing_mapping(wired):
    result = runner.invoke(cli.app, ["show", "zzz"])
    assert result.exit_code == 1
    assert "Mapping zzz not found" in result.output


def test_reset_log(wired):
    result = runner.invoke(cli.app, ["reset-log"])
    assert result.exit_code == 0
    assert wired.requests == []


def test_transport_error_surfaces(wired):
    wired.fail("GET", "/requests", 503)
    result = runner.invoke(cli.app, ["logs"])
    assert result.exit_code == 1
    assert "HTTP 503" in result.output


def test_help_lists_journal_to_mapping_commands():
    result = runner.invoke(cli.app, ["--help"])
    assert result.exit_code == 0
    for command in ("logs", "draft", "save"):
        assert command in result.output
