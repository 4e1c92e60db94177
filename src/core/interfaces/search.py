"""Contrato del servicio de búsqueda de Jira.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El retriever recibe el cliente explícitamente: en tests se sustituye por
  un doble en memoria sin monkey-patching.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class IssueSearchClient(Protocol):
    """Las dos variantes de búsqueda que expone Jira Cloud.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque hacen I/O (HTTP).
    - Devuelven el JSON de la página tal cual; la interpretación vive en el Core.
    - `search_enhanced` lanza `SearchProtocolUnavailable` si el endpoint no existe.
    - Cualquier otro fallo se propaga como `SearchError`.
    """

    async def search_enhanced(
        self,
        *,
        jql: str,
        fields: Sequence[str],
        max_results: int,
        next_page_token: str | None = None,
    ) -> dict[str, Any]:
        """Página de la búsqueda por cursor (`nextPageToken`/`isLast`)."""

        ...

    async def search_legacy(
        self,
        *,
        jql: str,
        fields: Sequence[str],
        start_at: int,
        max_results: int,
    ) -> dict[str, Any]:
        """Página de la búsqueda por offset (`startAt`/`maxResults`/`total`)."""

        ...
