"""Shared fixtures: an in-memory search client and raw Jira JSON builders."""

from __future__ import annotations

from typing import Any, Sequence

import pytest

from core.config import AppSettings
from core.exceptions import SearchProtocolUnavailable


class FakeSearchClient:
    """In-memory `IssueSearchClient` serving canned pages in order."""

    def __init__(
        self,
        *,
        enhanced_pages: Sequence[dict[str, Any]] = (),
        legacy_pages: Sequence[dict[str, Any]] = (),
        enhanced_unavailable: bool = False,
        error: Exception | None = None,
    ) -> None:
        self.enhanced_pages = list(enhanced_pages)
        self.legacy_pages = list(legacy_pages)
        self.enhanced_unavailable = enhanced_unavailable
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def search_enhanced(self, *, jql, fields, max_results, next_page_token=None):
        self.calls.append(
            (
                "enhanced",
                {"jql": jql, "fields": list(fields), "max_results": max_results, "next_page_token": next_page_token},
            )
        )
        if self.error is not None:
            raise self.error
        if self.enhanced_unavailable:
            raise SearchProtocolUnavailable()
        if not self.enhanced_pages:
            return {"issues": [], "isLast": True}
        return self.enhanced_pages.pop(0)

    async def search_legacy(self, *, jql, fields, start_at, max_results):
        self.calls.append(
            ("legacy", {"jql": jql, "fields": list(fields), "start_at": start_at, "max_results": max_results})
        )
        if self.error is not None:
            raise self.error
        if not self.legacy_pages:
            return {"issues": [], "maxResults": max_results, "total": 0}
        return self.legacy_pages.pop(0)


def raw_link(
    name: str = "Blocks",
    inward: str = "is blocked by",
    outward: str = "blocks",
    *,
    outward_key: str | None = None,
    inward_key: str | None = None,
) -> dict[str, Any]:
    link: dict[str, Any] = {"type": {"name": name, "inward": inward, "outward": outward}}
    if outward_key:
        link["outwardIssue"] = {"key": outward_key}
    if inward_key:
        link["inwardIssue"] = {"key": inward_key}
    return link


def raw_issue(
    key: str,
    *,
    links: Sequence[dict[str, Any]] = (),
    parent: dict[str, Any] | None = None,
    subtasks: Sequence[str] = (),
) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "issuelinks": list(links),
        "subtasks": [{"key": s} for s in subtasks],
    }
    if parent is not None:
        fields["parent"] = parent
    return {"key": key, "fields": fields}


def raw_parent(key: str, *, type_name: str | None = None, hierarchy_level: int | None = None) -> dict[str, Any]:
    if type_name is None and hierarchy_level is None:
        return {"key": key}
    issuetype: dict[str, Any] = {}
    if type_name is not None:
        issuetype["name"] = type_name
    if hierarchy_level is not None:
        issuetype["hierarchyLevel"] = hierarchy_level
    return {"key": key, "fields": {"issuetype": issuetype}}


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        jira_base_url="https://example.atlassian.net",
        jira_email="bot@example.com",
        jira_api_token="secret",
    )


@pytest.fixture
def make_issue():
    return raw_issue


@pytest.fixture
def make_link():
    return raw_link


@pytest.fixture
def make_parent():
    return raw_parent


@pytest.fixture
def fake_client_factory():
    return FakeSearchClient
