"""Resolver entry point.

Orquesta parser -> retriever -> extractor -> tope -> builder y garantiza el
contrato del harness: nunca lanza. Cualquier fallo se convierte en el
fragmento que no encaja nada, de modo que la consulta exterior sigue siendo
JQL válido.

Estados: Parse -> (ShortCircuitEmpty | Retrieve) -> Extract -> Cap -> Build.
Cualquier excepción salta a Fallback.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from adapters.jira_search import open_jira_search_client
from core.config import AppSettings
from core.domain.models import FunctionInvocation, ResolutionResult
from core.interfaces.search import IssueSearchClient
from core.logging import InvocationLogger, invocation_logger
from core.services.arg_parser import parse_argument
from core.services.extractors import extract_keys
from core.services.jql_builder import SAFE_NO_MATCH, build_issue_key_jql
from core.services.seed_retriever import SEED_FIELDS, retrieve_seed_issues

logger = logging.getLogger(__name__)


def _elapsed_ms(started_at: float) -> int:
    return int((time.monotonic() - started_at) * 1000)


async def _run_pipeline(
    invocation: FunctionInvocation,
    *,
    client: IssueSearchClient,
    settings: AppSettings,
    started_at: float,
    log: InvocationLogger,
) -> ResolutionResult:
    negate = invocation.negate
    request = parse_argument(invocation.argument)
    if not request.inner_jql:
        log.warning("No inner JQL provided.")
        return ResolutionResult(jql=SAFE_NO_MATCH, mode=request.mode, elapsed_ms=_elapsed_ms(started_at))

    seeds = await retrieve_seed_issues(
        client,
        jql=request.inner_jql,
        fields=SEED_FIELDS,
        page_cap=settings.page_cap,
        page_size=settings.page_size,
    )
    keys = extract_keys(seeds, request.mode, request.link_filter)
    limited = keys[: settings.max_result_keys]
    fragment = build_issue_key_jql(limited, negate=negate)

    result = ResolutionResult(
        jql=fragment,
        mode=request.mode,
        link_filter=request.link_filter,
        seed_count=len(seeds),
        key_count=len(limited),
        elapsed_ms=_elapsed_ms(started_at),
    )
    log.info(
        "Done in %dms; mode=%s; seeds=%d; resultKeys=%d; filter=%s",
        result.elapsed_ms,
        request.mode.value,
        result.seed_count,
        result.key_count,
        request.link_filter.model_dump(mode="json") if request.link_filter else None,
    )
    if len(keys) > len(limited):
        log.warning("Result capped at %d of %d keys", len(limited), len(keys))
    return result


async def resolve(
    invocation: FunctionInvocation,
    *,
    client: IssueSearchClient,
    settings: AppSettings | None = None,
) -> ResolutionResult:
    """Resuelve una invocación. Nunca lanza.

    En caso de fallo devuelve `SAFE_NO_MATCH` (sea cual sea el operador) y
    deja el mensaje en `ResolutionResult.error`.
    """

    started_at = time.monotonic()
    log = invocation_logger(logger)
    try:
        settings = settings or AppSettings()
        return await _run_pipeline(
            invocation,
            client=client,
            settings=settings,
            started_at=started_at,
            log=log,
        )
    except Exception as exc:
        log.exception("Resolver error: %s", exc)
        return ResolutionResult(
            jql=SAFE_NO_MATCH,
            error=str(exc) or exc.__class__.__name__,
            elapsed_ms=_elapsed_ms(started_at),
        )


async def handle_invocation(
    payload: Any,
    *,
    client: IssueSearchClient | None = None,
    settings: AppSettings | None = None,
) -> dict[str, str]:
    """Adaptador del harness: `{"clause": {...}}` -> `{"jql": ...}`.

    Si no se inyecta cliente, abre uno contra Jira con la identidad de la app
    y lo cierra al terminar.
    """

    try:
        invocation = FunctionInvocation.from_payload(payload)
        if client is not None:
            result = await resolve(invocation, client=client, settings=settings)
            return {"jql": result.jql}

        settings = settings or AppSettings()
        async with open_jira_search_client(settings) as jira:
            result = await resolve(invocation, client=jira, settings=settings)
        return {"jql": result.jql}
    except Exception as exc:
        logger.exception("Invocation error: %s", exc)
        return {"jql": SAFE_NO_MATCH}
