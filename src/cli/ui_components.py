"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `resolve` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ResolutionResult
from core.services.jql_builder import parse_key_list

_KEY_PREVIEW = 10


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (`--json`).
    """

    title = Text("jql-relations", style="bold cyan")
    subtitle = Text("Linked • Parent • Epic • Subtask", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_result_table(result: ResolutionResult) -> Table:
    """Tabla con los metadatos de una resolución."""

    table = Table(title="Resolution")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Mode", result.mode.label() if result.mode else "-")
    if result.link_filter:
        hint = result.link_filter.type_hint or "*"
        direction = result.link_filter.direction.value if result.link_filter.direction else "both"
        table.add_row("Link filter", f"{hint} -> {direction}")
    table.add_row("Seed issues", str(result.seed_count))
    table.add_row("Result keys", str(result.key_count))
    keys = parse_key_list(result.jql)
    if keys:
        preview = ", ".join(keys[:_KEY_PREVIEW])
        if len(keys) > _KEY_PREVIEW:
            preview += f" (+{len(keys) - _KEY_PREVIEW} more)"
        table.add_row("Keys", preview)
    table.add_row("Elapsed", f"{result.elapsed_ms} ms")
    if result.error:
        table.add_row("Error", Text(result.error, style="red"))
    return table


def build_jql_panel(result: ResolutionResult) -> Panel:
    """Panel con el fragmento JQL devuelto."""

    style = "red" if result.error else "green"
    return Panel(Text(result.jql), title=Text("JQL", style=f"bold {style}"), border_style=style)
