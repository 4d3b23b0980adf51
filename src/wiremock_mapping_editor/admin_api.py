"""Async client for the mock server admin API.

The admin API is treated as a black box: JSON over HTTP, success means a 2xx
status, and error bodies are never interpreted. Any non-2xx response becomes
an `AdminApiError` whose message is ``"HTTP <status>"``; a failure to get a
response at all (connection refused, timeout) becomes an `AdminApiError` with
``status_code=None`` carrying the transport error text.

Endpoints (relative to the configured prefix, ``/api`` by default):
    GET    /requests            journal  -> {"requests": [...]}
    DELETE /requests            clear the journal
    GET    /mappings            mappings -> {"mappings": [...]}
    POST   /mappings            create
    PUT    /mappings/{id}       replace
    DELETE /mappings/{id}       remove
    POST   /mappings/save       persist in-memory mappings to disk

No retries are performed here or anywhere above; recovery is user-initiated.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import AdminApiError

__all__ = ["AdminApiClient"]

logger = logging.getLogger(__name__)


class AdminApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        auth: Optional[tuple[str, str]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url.endswith("/"):
            base_url = base_url[:-1]
        self.base = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=auth,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AdminApiClient":
        return cls(
            settings.admin_api_url,
            auth=settings.basic_auth,
            timeout=settings.HTTP_TIMEOUT,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _send(
        self, method: str, path: str, *, body: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        logger.debug("admin api %s %s%s", method, self.base, path)
        try:
            resp = await self._client.request(method, path, json=body)
        except httpx.HTTPError as e:
            logger.debug("admin api %s %s transport failure: %s", method, path, e)
            raise AdminApiError(None, f"{method} {path} failed: {e}") from e
        if not resp.is_success:
            logger.debug("admin api %s %s -> HTTP %s", method, path, resp.status_code)
            raise AdminApiError(resp.status_code)
        return resp

    @staticmethod
    def _json_or_none(resp: httpx.Response) -> Optional[Any]:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None

    async def _get_json(self, path: str) -> Any:
        resp = await self._send("GET", path)
        try:
            return resp.json()
        except ValueError as e:
            raise AdminApiError(None, f"GET {path} returned invalid JSON") from e

    @staticmethod
    def _mapping_path(mapping_id: str) -> str:
        return f"/mappings/{quote(mapping_id, safe='')}"

    # ---------------- Journal -----------------
    async def list_requests(self) -> Any:
        return await self._get_json("/requests")

    async def reset_requests(self) -> None:
        await self._send("DELETE", "/requests")

    # ---------------- Mappings -----------------
    async def list_mappings(self) -> Any:
        return await self._get_json("/mappings")

    async def create_mapping(self, document: Dict[str, Any]) -> Optional[Any]:
        resp = await self._send("POST", "/mappings", body=document)
        return self._json_or_none(resp)

    async def update_mapping(self, mapping_id: str, document: Dict[str, Any]) -> Optional[Any]:
        resp = await self._send("PUT", self._mapping_path(mapping_id), body=document)
        return self._json_or_none(resp)

    async def delete_mapping(self, mapping_id: str) -> None:
        await self._send("DELETE", self._mapping_path(mapping_id))

    async def persist_mappings(self) -> None:
        """Ask the server to write its in-memory mappings to durable storage."""
        await self._send("POST", "/mappings/save")
