"""Adaptador de búsqueda JQL (Jira Cloud REST v3).

Responsabilidad:
- Enhanced search: `POST /rest/api/3/search/jql` (paginación por cursor).
- Legacy search: `GET /rest/api/3/search` (paginación por offset).
- Traducir estados HTTP a la taxonomía de errores del Core.

No interpreta las issues: devuelve el JSON de cada página.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.exceptions import SearchError, SearchProtocolUnavailable

ENHANCED_SEARCH_PATH = "/rest/api/3/search/jql"
LEGACY_SEARCH_PATH = "/rest/api/3/search"


class JiraSearchClient:
    """Implementación HTTP de `core.interfaces.search.IssueSearchClient`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def search_enhanced(
        self,
        *,
        jql: str,
        fields: Sequence[str],
        max_results: int,
        next_page_token: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "jql": jql,
            "maxResults": max_results,
            "fields": list(fields),
        }
        if next_page_token:
            body["nextPageToken"] = next_page_token

        resp = await self._client.post(
            ENHANCED_SEARCH_PATH,
            json=body,
            headers={"Content-Type": "application/json"},
        )
        if resp.status_code == 404:
            raise SearchProtocolUnavailable()
        return _json_or_raise(resp, protocol="enhanced")

    async def search_legacy(
        self,
        *,
        jql: str,
        fields: Sequence[str],
        start_at: int,
        max_results: int,
    ) -> dict[str, Any]:
        params = {
            "jql": jql,
            "startAt": start_at,
            "maxResults": max_results,
            "fields": ",".join(fields),
        }
        resp = await self._client.get(LEGACY_SEARCH_PATH, params=params)
        return _json_or_raise(resp, protocol="legacy")


def _json_or_raise(resp: httpx.Response, *, protocol: str) -> dict[str, Any]:
    if not resp.is_success:
        raise SearchError(protocol, resp.status_code, resp.text)
    data = resp.json()
    return data if isinstance(data, dict) else {}


@asynccontextmanager
async def open_jira_search_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[JiraSearchClient]:
    """Abre un cliente de búsqueda con vida limitada a una invocación."""

    async with build_async_client(settings, transport=transport) as client:
        yield JiraSearchClient(client)
