"""Serialización segura de un conjunto de claves a JQL.

Por qué un módulo aparte:
- Es el único punto donde se construye texto JQL a partir de datos externos.
- Las claves se escapan siempre, aunque los extractores ya devuelvan claves
  válidas de Jira.
"""

from __future__ import annotations

import re
from typing import Iterable

NO_MATCH_SENTINEL = "__NO_MATCH__"

# Cláusula que no encaja con ninguna issue, y su negación.
SAFE_NO_MATCH = f'issuekey = "{NO_MATCH_SENTINEL}"'
SAFE_MATCH_ALL = f'issuekey != "{NO_MATCH_SENTINEL}"'

_QUOTED_KEY_RE = re.compile(r"'((?:\\.|[^'\\])*)'")
_ESCAPE_RE = re.compile(r"\\(.)")


def escape_key(key: str) -> str:
    """Escapa `\\` y `'` para incluir la clave entre comillas simples."""

    return str(key).replace("\\", "\\\\").replace("'", "\\'")


def build_issue_key_jql(keys: Iterable[str], *, negate: bool = False) -> str:
    """Construye `issuekey in (...)` / `issuekey not in (...)`.

    Conjunto vacío:
    - sin negar => cláusula que no encaja nada
    - negado    => su negación (encaja todo)
    """

    unique = list(dict.fromkeys(str(k) for k in keys))
    if not unique:
        return SAFE_MATCH_ALL if negate else SAFE_NO_MATCH

    key_list = ", ".join(f"'{escape_key(k)}'" for k in unique)
    operator = "not in" if negate else "in"
    return f"issuekey {operator} ({key_list})"


def parse_key_list(fragment: str) -> list[str]:
    """Recupera las claves de un fragmento generado por `build_issue_key_jql`."""

    return [_ESCAPE_RE.sub(r"\1", m.group(1)) for m in _QUOTED_KEY_RE.finditer(fragment)]
