"""Relationship extractors.

Pure functions over already-fetched seed issues: no I/O, no shared state.
Every extractor returns the collected keys deduplicated, in extraction
order, so the later size cap keeps a deterministic prefix.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence

from core.domain.models import IssueLink, LinkFilter, SeedIssue
from core.domain.modes import LinkDirection, RelationMode


def _unique(keys: Iterable[str | None]) -> list[str]:
    """Remove empty and duplicated keys keeping the first occurrence."""

    return list(dict.fromkeys(k for k in keys if k))


def _link_matches(link: IssueLink, type_hint: str) -> bool:
    return type_hint in link.type.labels()


def _linked_keys(issues: Sequence[SeedIssue], link_filter: LinkFilter | None) -> Iterator[str | None]:
    type_hint = ((link_filter.type_hint if link_filter else None) or "").strip().lower()
    direction = link_filter.direction if link_filter else None
    want_outward = direction in (None, LinkDirection.OUTWARD)
    want_inward = direction in (None, LinkDirection.INWARD)

    for issue in issues:
        for link in issue.links:
            if type_hint and not _link_matches(link, type_hint):
                continue
            if want_outward and link.outward_issue is not None:
                yield link.outward_issue.key
            if want_inward and link.inward_issue is not None:
                yield link.inward_issue.key


def extract_linked_keys(issues: Sequence[SeedIssue], link_filter: LinkFilter | None = None) -> list[str]:
    """Keys on the other end of every issue link.

    Without a filter both sides are collected. A type hint keeps only links
    whose name, inward label or outward label equals it (trimmed,
    case-insensitive). A direction keeps only that side's key; a hint
    without a direction collects both sides of the matching links.
    """

    return _unique(_linked_keys(issues, link_filter))


def extract_parent_keys(issues: Sequence[SeedIssue]) -> list[str]:
    """Direct parent of every seed issue, whatever its type."""

    return _unique(issue.parent.key for issue in issues if issue.parent is not None)


def extract_epic_parent_keys(issues: Sequence[SeedIssue]) -> list[str]:
    """Parents that look like epics.

    A parent counts when its hierarchy level is 1, its type name is "epic",
    or its type was not expanded at all (unknown types are kept to avoid
    dropping real epics).
    """

    def epic_key(issue: SeedIssue) -> str | None:
        parent = issue.parent
        if parent is None:
            return None
        issue_type = parent.issue_type
        if issue_type is None:
            return parent.key
        if issue_type.hierarchy_level == 1 or (issue_type.name or "").strip().lower() == "epic":
            return parent.key
        return None

    return _unique(epic_key(issue) for issue in issues)


def extract_subtask_keys(issues: Sequence[SeedIssue]) -> list[str]:
    return _unique(sub.key for issue in issues for sub in issue.subtasks)


_EXTRACTORS: dict[RelationMode, Callable[[Sequence[SeedIssue]], list[str]]] = {
    RelationMode.PARENT: extract_parent_keys,
    RelationMode.EPIC_OF: extract_epic_parent_keys,
    RelationMode.SUBTASK: extract_subtask_keys,
}


def extract_keys(
    issues: Sequence[SeedIssue],
    mode: RelationMode,
    link_filter: LinkFilter | None = None,
) -> list[str]:
    """Dispatch to the extractor for `mode`."""

    if mode is RelationMode.LINKED:
        return extract_linked_keys(issues, link_filter)
    extractor = _EXTRACTORS.get(mode)
    if extractor is None:
        raise ValueError(f"Unsupported relation mode: {mode!r}")
    return extractor(issues)
