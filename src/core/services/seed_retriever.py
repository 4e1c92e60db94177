"""Seed retrieval: run the inner JQL against Jira search.

Two pagination protocols, chosen at run time:

- enhanced (cursor): `nextPageToken` / `isLast`, tried first;
- legacy (offset): `startAt` / `maxResults` / `total`, used only when the
  enhanced endpoint reports `SearchProtocolUnavailable`.

Both are capped at `page_cap` pages of `page_size` issues, so one
invocation never reads more than `page_cap * page_size` seed issues.
Any other failure propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core.domain.models import SeedIssue
from core.exceptions import SearchProtocolUnavailable
from core.interfaces.search import IssueSearchClient

logger = logging.getLogger(__name__)

# Campos mínimos para los extractores; payload pequeño para evitar timeouts.
SEED_FIELDS: tuple[str, ...] = ("issuelinks", "parent", "issuetype", "subtasks")

DEFAULT_PAGE_CAP = 4
DEFAULT_PAGE_SIZE = 100


def _page_issues(data: Any) -> list[Any]:
    if not isinstance(data, dict):
        return []
    issues = data.get("issues")
    return issues if isinstance(issues, list) else []


async def _fetch_enhanced(
    client: IssueSearchClient,
    *,
    jql: str,
    fields: Sequence[str],
    page_cap: int,
    page_size: int,
) -> list[Any]:
    raw: list[Any] = []
    next_page_token: str | None = None
    for page in range(page_cap):
        data = await client.search_enhanced(
            jql=jql,
            fields=fields,
            max_results=page_size,
            next_page_token=next_page_token,
        )
        raw.extend(_page_issues(data))
        logger.debug("enhanced page=%d issues=%d", page, len(raw))

        token = data.get("nextPageToken") if isinstance(data, dict) else None
        if not token or data.get("isLast") is True:
            break
        next_page_token = str(token)
    return raw


async def _fetch_legacy(
    client: IssueSearchClient,
    *,
    jql: str,
    fields: Sequence[str],
    page_cap: int,
    page_size: int,
) -> list[Any]:
    raw: list[Any] = []
    start_at = 0
    for page in range(page_cap):
        data = await client.search_legacy(
            jql=jql,
            fields=fields,
            start_at=start_at,
            max_results=page_size,
        )
        raw.extend(_page_issues(data))
        logger.debug("legacy page=%d startAt=%d issues=%d", page, start_at, len(raw))

        reported = data.get("maxResults") if isinstance(data, dict) else None
        step = reported if isinstance(reported, int) and 0 < reported < page_size else page_size
        start_at += step

        total = data.get("total") if isinstance(data, dict) else None
        if start_at >= (total if isinstance(total, int) else 0):
            break
    return raw


async def retrieve_seed_issues(
    client: IssueSearchClient,
    *,
    jql: str,
    fields: Sequence[str] = SEED_FIELDS,
    page_cap: int = DEFAULT_PAGE_CAP,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[SeedIssue]:
    """Fetch the seed issues matched by `jql`.

    Args:
        client: Search client acting with the application identity.
        jql: Inner sub-query, sent as-is.
        fields: Field projection; duplicates are dropped, order kept.
        page_cap: Maximum number of pages.
        page_size: Issues requested per page.

    Returns:
        Seed issues in service order.

    Raises:
        SearchError: a page came back with a non-success status.
    """

    wanted = list(dict.fromkeys(fields))
    page_cap = max(1, page_cap)
    page_size = max(1, page_size)

    try:
        raw = await _fetch_enhanced(client, jql=jql, fields=wanted, page_cap=page_cap, page_size=page_size)
    except SearchProtocolUnavailable:
        logger.info("Enhanced JQL search not available, falling back to legacy pagination")
        raw = await _fetch_legacy(client, jql=jql, fields=wanted, page_cap=page_cap, page_size=page_size)

    return [SeedIssue.from_api(item) for item in raw]
