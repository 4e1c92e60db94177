"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base_url, timeouts, headers y credenciales de la app contra Jira.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_auth(settings: AppSettings) -> httpx.Auth | None:
    """Identidad 'as app': bearer si existe, si no basic (email + API token)."""

    if settings.jira_bearer_token:
        return _BearerAuth(settings.jira_bearer_token)
    if settings.jira_email and settings.jira_api_token:
        return httpx.BasicAuth(settings.jira_email, settings.jira_api_token)
    return None


class _BearerAuth(httpx.Auth):
    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al sitio Jira configurado.

    Por qué un builder:
    - Centraliza timeouts/headers/auth para que todas las llamadas se comporten igual.
    - El caller decide el ciclo de vida (`async with`).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        base_url=settings.jira_base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        auth=build_auth(settings),
        transport=transport,
    )
