"""Parser del argumento libre de la función JQL.

Gramática (espacios insignificantes alrededor de cada token):

    argument := [ mode [ "[" filter "]" ] ":" ] inner_jql
    mode     := "linked" | "parent" | "epic-of" | "subtask" | "substask"
    filter   := type_hint | type_hint "->" direction | "->" direction
    direction:= "inward" | "outward"

Ejemplos:

    linked: project = ABC
    linked[relates to]: project = ABC
    linked[blocks->outward]: project = ABC
    linked[is blocked by->inward]: project = ABC
    epic-of: issuetype = Task
    project = ABC                 # sin prefijo => linked

Una sola pasada: si el prefijo no encaja, el argumento entero (trim) es la
sub-consulta y el modo es `linked`.
"""

from __future__ import annotations

from core.domain.models import LinkFilter, ParsedRequest
from core.domain.modes import LinkDirection, RelationMode

_ARROW = "->"


class _Cursor:
    """Lector secuencial sobre el argumento."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def take(self, char: str) -> bool:
        self.skip_ws()
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def take_word(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isalpha() or self.text[self.pos] == "-"):
            self.pos += 1
        return self.text[start : self.pos]

    def take_until(self, char: str) -> str | None:
        end = self.text.find(char, self.pos)
        if end < 0:
            return None
        chunk = self.text[self.pos : end]
        self.pos = end + 1
        return chunk

    def rest(self) -> str:
        return self.text[self.pos :]


def parse_argument(raw: str | None) -> ParsedRequest:
    """Decodifica el argumento en `{mode, link_filter, inner_jql}`.

    Nunca lanza: un argumento vacío devuelve `inner_jql=""` y el resolver
    corta ahí sin ir a la red.
    """

    text = (raw or "").strip()
    if not text:
        return ParsedRequest(mode=RelationMode.default(), inner_jql="")

    matched = _match_prefixed(text)
    if matched is not None:
        return matched
    return ParsedRequest(mode=RelationMode.default(), inner_jql=text)


def _match_prefixed(text: str) -> ParsedRequest | None:
    cursor = _Cursor(text)
    mode = RelationMode.from_token(cursor.take_word())
    if mode is None:
        return None

    link_filter: LinkFilter | None = None
    if cursor.take("["):
        body = cursor.take_until("]")
        if body is None:
            return None
        link_filter = _parse_filter(body)
        if link_filter is None:
            return None

    if not cursor.take(":"):
        return None
    inner = cursor.rest().strip()
    if not inner:
        return None

    # El filtro solo tiene sentido para `linked`; en otros modos se ignora.
    if mode is not RelationMode.LINKED or link_filter is None or link_filter.is_empty():
        link_filter = None
    return ParsedRequest(mode=mode, link_filter=link_filter, inner_jql=inner)


def _parse_filter(body: str) -> LinkFilter | None:
    hint_part, arrow, direction_part = body.partition(_ARROW)
    type_hint = hint_part.strip() or None

    direction: LinkDirection | None = None
    if arrow:
        direction = LinkDirection.from_token(direction_part)
        if direction is None:
            return None

    if type_hint is None and direction is None:
        return None
    return LinkFilter(type_hint=type_hint, direction=direction)
