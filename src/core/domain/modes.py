"""Relationship modes and link directions.

This module centralizes the vocabulary of the argument mini-language.
Keeping it in the domain layer lets the parser, the extractors and the
CLI share a single source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class RelationMode(str, Enum):
    """Which edge to follow from every seed issue."""

    LINKED = "linked"
    PARENT = "parent"
    EPIC_OF = "epic-of"
    SUBTASK = "subtask"

    @classmethod
    def default(cls) -> "RelationMode":
        """Mode used when the argument carries no recognizable prefix."""

        return cls.LINKED

    @classmethod
    def from_token(cls, token: str) -> "RelationMode | None":
        """Map a mode word (case-insensitive, aliases included) to a mode."""

        return _MODE_TOKENS.get(token.strip().lower())

    def label(self) -> str:
        """Human readable label for logs and the CLI."""

        return _MODE_LABELS[self]


class LinkDirection(str, Enum):
    """Side of an issue link whose key gets collected."""

    INWARD = "inward"
    OUTWARD = "outward"

    @classmethod
    def from_token(cls, token: str) -> "LinkDirection | None":
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


_MODE_TOKENS: dict[str, RelationMode] = {
    "linked": RelationMode.LINKED,
    "parent": RelationMode.PARENT,
    "epic-of": RelationMode.EPIC_OF,
    "subtask": RelationMode.SUBTASK,
    # Typo frecuente en filtros guardados.
    "substask": RelationMode.SUBTASK,
}

_MODE_LABELS: dict[RelationMode, str] = {
    RelationMode.LINKED: "Linked issues",
    RelationMode.PARENT: "Parent",
    RelationMode.EPIC_OF: "Epic parent",
    RelationMode.SUBTASK: "Subtasks",
}
