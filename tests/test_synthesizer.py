from __future__ import annotations

import copy
import json

from wiremock_mapping_editor.mapper import draft_from_log_entry, mapping_from_log_entry
from wiremock_mapping_editor.mapping.synthesizer import (
    DRAFT_PRIORITY,
    build_query_matchers,
    split_url,
    synthesize_draft,
)
from wiremock_mapping_editor.models.log_entry import normalize_log_entry


def _doc(raw):
    return json.loads(draft_from_log_entry(raw).text)


def test_end_to_end_post_with_query():
    draft = draft_from_log_entry({"request": {"method": "POST", "url": "/items?sort=asc"}})
    doc = json.loads(draft.text)
    assert doc["name"] == "AUTO POST /items"
    assert doc["priority"] == 10 == DRAFT_PRIORITY
    assert doc["request"] == {
        "method": "POST",
        "urlPath": "/items",
        "queryParameters": {"sort": {"equalTo": "asc"}},
    }
    assert doc["response"]["status"] == 200
    assert doc["response"]["headers"]["Content-Type"].startswith("application/json")
    assert doc["response"]["jsonBody"] == {}
    assert draft.source_label == "POST /items?sort=asc"


def test_no_query_means_no_query_parameters_key():
    doc = _doc({"request": {"method": "GET", "url": "/health"}})
    assert "queryParameters" not in doc["request"]
    doc = _doc({"request": {"method": "GET", "url": "/health?"}})
    assert "queryParameters" not in doc["request"]


def test_repeated_query_name_first_wins():
    doc = _doc({"request": {"method": "GET", "url": "/orders?status=open&status=closed&id=7"}})
    assert doc["request"]["queryParameters"] == {
        "status": {"equalTo": "open"},
        "id": {"equalTo": "7"},
    }
    assert list(doc["request"]["queryParameters"]) == ["status", "id"]


def test_split_only_at_first_question_mark():
    assert split_url("/a?x=1?y=2") == ("/a", "x=1?y=2")
    doc = _doc({"request": {"method": "GET", "url": "/a?x=1?y=2"}})
    assert doc["request"]["urlPath"] == "/a"
    assert doc["request"]["queryParameters"] == {"x": {"equalTo": "1?y=2"}}


def test_query_values_are_form_decoded():
    assert build_query_matchers("q=hello+world&e=a%26b&flag") == {
        "q": {"equalTo": "hello world"},
        "e": {"equalTo": "a&b"},
        "flag": {"equalTo": ""},
    }


def test_defaults_for_missing_method_and_url():
    draft = draft_from_log_entry({"request": {}})
    doc = json.loads(draft.text)
    assert doc["name"] == "AUTO GET /"
    assert doc["request"] == {"method": "GET", "urlPath": "/"}
    assert draft.source_label == "GET "


def test_query_only_url_uses_root_path():
    doc = _doc({"request": {"method": "DELETE", "url": "?id=3"}})
    assert doc["request"]["urlPath"] == "/"
    assert doc["name"] == "AUTO DELETE /"


def test_draft_text_is_indented_json_without_id():
    draft = draft_from_log_entry({"request": {"method": "GET", "url": "/x"}})
    assert draft.text.startswith('{\n  "name": "AUTO GET /x"')
    assert "id" not in json.loads(draft.text)


def test_input_not_mutated_and_output_deterministic():
    raw = {"request": {"method": "PUT", "url": "/z?b=2"}, "response": {"status": 500, "body": "x"}}
    before = copy.deepcopy(raw)
    entry = normalize_log_entry(raw)
    first = synthesize_draft(entry)
    second = synthesize_draft(entry)
    assert raw == before
    assert first == second
    # captured response never leaks into the draft
    assert json.loads(first.text)["response"]["status"] == 200


def test_mapping_model_facade():
    mapping = mapping_from_log_entry({"request": {"method": "GET", "url": "/m?k=v"}})
    assert mapping.id is None
    assert mapping.request.urlPath == "/m"
    assert mapping.label == "AUTO GET /m  |  GET /m"
