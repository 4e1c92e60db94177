"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las respuestas de búsqueda de Jira son JSON laxo: aquí se normalizan a
  estructuras explícitas con campos opcionales.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from core.domain.modes import LinkDirection, RelationMode


class IssueRef(BaseModel):
    """Referencia mínima a otra issue (solo la clave)."""

    model_config = ConfigDict(extra="ignore")

    key: str | None = Field(
        default=None,
        description="Clave de la issue referenciada (p.ej. 'ABC-1').",
    )


class LinkType(BaseModel):
    """Descriptor de tipo de enlace tal como lo expone Jira.

    Ejemplo: name='Blocks', inward='is blocked by', outward='blocks'.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    inward: str | None = None
    outward: str | None = None

    @field_validator("name", "inward", "outward", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str | None:
        # Jira a veces devuelve etiquetas no textuales; se comparan como texto.
        return None if value is None else str(value)

    def labels(self) -> tuple[str, str, str]:
        """Nombre y etiquetas normalizadas (trim + lower) para comparar."""

        return (
            (self.name or "").strip().lower(),
            (self.inward or "").strip().lower(),
            (self.outward or "").strip().lower(),
        )


class IssueLink(BaseModel):
    """Un enlace de `fields.issuelinks`.

    `outward_issue` existe cuando la issue semilla es el lado inward y viceversa.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: LinkType = Field(default_factory=LinkType)
    outward_issue: IssueRef | None = Field(default=None, alias="outwardIssue")
    inward_issue: IssueRef | None = Field(default=None, alias="inwardIssue")

    @field_validator("type", mode="before")
    @classmethod
    def _type_or_empty(cls, value: Any) -> Any:
        """Un `type` ausente o mal formado no invalida el enlace."""

        return value if isinstance(value, dict) else {}


class IssueTypeDescriptor(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hierarchy_level: int | None = Field(default=None, alias="hierarchyLevel")
    name: str | None = None


class ParentRef(BaseModel):
    """Padre directo de la issue semilla (epic, story, etc.)."""

    key: str | None = None
    issue_type: IssueTypeDescriptor | None = Field(
        default=None,
        description="Tipo del padre; None si Jira no expandió `fields.issuetype`.",
    )


class SeedIssue(BaseModel):
    """Issue devuelta por la sub-consulta, reducida a lo que usan los extractores.

    Por qué un modelo explícito:
    - Cada relación (links, parent, subtasks) es opcional por separado.
    - Los extractores tratan la ausencia como "sin aporte", nunca como error.
    """

    key: str | None = None
    links: list[IssueLink] = Field(default_factory=list)
    parent: ParentRef | None = None
    subtasks: list[IssueRef] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: Any) -> "SeedIssue":
        """Construye un `SeedIssue` desde el JSON crudo de `/search`.

        Las piezas mal formadas se descartan una a una en lugar de invalidar
        la issue entera.
        """

        if not isinstance(payload, dict):
            return cls()

        fields = payload.get("fields")
        if not isinstance(fields, dict):
            fields = {}

        links: list[IssueLink] = []
        for raw_link in fields.get("issuelinks") or []:
            if not isinstance(raw_link, dict):
                continue
            try:
                links.append(IssueLink.model_validate(raw_link))
            except ValidationError:
                continue

        subtasks: list[IssueRef] = []
        for raw_sub in fields.get("subtasks") or []:
            if not isinstance(raw_sub, dict):
                continue
            try:
                subtasks.append(IssueRef.model_validate(raw_sub))
            except ValidationError:
                continue

        key = payload.get("key")
        return cls(
            key=key if isinstance(key, str) else None,
            links=links,
            parent=_parse_parent(fields.get("parent")),
            subtasks=subtasks,
        )


def _parse_parent(raw: Any) -> ParentRef | None:
    if not isinstance(raw, dict):
        return None
    key = raw.get("key")
    if not isinstance(key, str) or not key:
        return None

    issue_type: IssueTypeDescriptor | None = None
    parent_fields = raw.get("fields")
    if isinstance(parent_fields, dict) and isinstance(parent_fields.get("issuetype"), dict):
        try:
            issue_type = IssueTypeDescriptor.model_validate(parent_fields["issuetype"])
        except ValidationError:
            issue_type = None
    return ParentRef(key=key, issue_type=issue_type)


class LinkFilter(BaseModel):
    """Filtro opcional de enlaces (solo para el modo `linked`)."""

    type_hint: str | None = Field(
        default=None,
        description="Texto comparado (trim, case-insensitive) con name/inward/outward.",
    )
    direction: LinkDirection | None = Field(
        default=None,
        description="Lado del enlace cuya clave se recoge.",
    )

    def is_empty(self) -> bool:
        return not self.type_hint and self.direction is None


class ParsedRequest(BaseModel):
    """Resultado del parser del argumento libre."""

    mode: RelationMode = RelationMode.LINKED
    link_filter: LinkFilter | None = None
    inner_jql: str = ""


class FunctionInvocation(BaseModel):
    """Lo que entrega el harness de funciones JQL: operador + argumentos."""

    operator: str = "in"
    arguments: list[str] = Field(default_factory=list)

    @property
    def negate(self) -> bool:
        """Cualquier operador distinto de `in` se trata como negación."""

        return self.operator != "in"

    @property
    def argument(self) -> str:
        return self.arguments[0] if self.arguments else ""

    @classmethod
    def from_payload(cls, payload: Any) -> "FunctionInvocation":
        """Lee `{"clause": {"operator": ..., "arguments": [...]}}` de forma tolerante."""

        clause = payload.get("clause") if isinstance(payload, dict) else None
        if not isinstance(clause, dict):
            return cls()

        operator = clause.get("operator")
        raw_args = clause.get("arguments")
        arguments = ["" if a is None else str(a) for a in raw_args] if isinstance(raw_args, list) else []
        return cls(
            operator=operator if isinstance(operator, str) and operator.strip() else "in",
            arguments=arguments,
        )


class ResolutionResult(BaseModel):
    """Salida completa de una resolución (el harness solo ve `jql`)."""

    jql: str = Field(..., min_length=1, description="Fragmento JQL devuelto.")
    mode: RelationMode | None = None
    link_filter: LinkFilter | None = None
    seed_count: int = Field(default=0, ge=0)
    key_count: int = Field(default=0, ge=0)
    elapsed_ms: int = Field(default=0, ge=0)
    error: str | None = Field(
        default=None,
        description="Mensaje del fallo que forzó el fragmento de seguridad (si hubo).",
    )
