import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

# Ensure the src layout is importable for tests when not installed editable.
SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from wiremock_mapping_editor.admin_api import AdminApiClient  # noqa: E402

BASE_URL = "http://wiremock.test/api"


class FakeAdmin:
    """In-memory stand-in for the admin API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: List[Dict[str, Any]] = []
        self.mappings: List[Dict[str, Any]] = []
        self.calls: List[Tuple[str, str, Optional[Any]]] = []
        self.failures: Dict[Tuple[str, str], int] = {}
        self.persist_count = 0
        self._next_id = 1

    def fail(self, method: str, path: str, status: int) -> None:
        self.failures[(method, path)] = status

    def calls_to(self, method: str, path: Optional[str] = None) -> List[Tuple[str, str, Optional[Any]]]:
        return [c for c in self.calls if c[0] == method and (path is None or c[1] == path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        body = json.loads(request.content) if request.content else None
        method = request.method
        self.calls.append((method, path, body))
        if (method, path) in self.failures:
            return httpx.Response(self.failures[(method, path)], text="boom")

        if path == "/requests":
            if method == "GET":
                return httpx.Response(200, json={"requests": self.requests})
            if method == "DELETE":
                self.requests = []
                return httpx.Response(200)
        if path == "/mappings/save" and method == "POST":
            self.persist_count += 1
            return httpx.Response(200)
        if path == "/mappings":
            if method == "GET":
                return httpx.Response(200, json={"mappings": self.mappings})
            if method == "POST":
                created = dict(body or {})
                created.setdefault("id", f"new-{self._next_id}")
                self._next_id += 1
                self.mappings.append(created)
                return httpx.Response(201, json=created)
        if path.startswith("/mappings/"):
            mapping_id = path[len("/mappings/"):]
            idx = next((i for i, m in enumerate(self.mappings) if m.get("id") == mapping_id), None)
            if idx is None:
                return httpx.Response(404)
            if method == "PUT":
                updated = dict(body or {})
                updated["id"] = mapping_id
                self.mappings[idx] = updated
                return httpx.Response(200, json=updated)
            if method == "DELETE":
                del self.mappings[idx]
                return httpx.Response(200)
        return httpx.Response(404)


@pytest.fixture
def fake_admin() -> FakeAdmin:
    return FakeAdmin()


@pytest.fixture
def client(fake_admin: FakeAdmin) -> AdminApiClient:
    return AdminApiClient(BASE_URL, transport=httpx.MockTransport(fake_admin.handler))
