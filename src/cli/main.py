"""CLI principal (Typer).

Por qué una CLI:
- Permite ejecutar la función JQL igual que la invocaría Jira, sin desplegar.
- Útil para depurar filtros guardados: muestra modo, filtro y contadores.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_result_json
from adapters.jira_search import open_jira_search_client
from cli import doctor
from cli.ui_components import build_jql_panel, build_result_table, print_banner
from core.config import AppSettings
from core.domain.models import FunctionInvocation, ResolutionResult
from core.logging import setup_logging
from core.services.resolver import resolve

app = typer.Typer(no_args_is_help=True, help="Resolve related-issue JQL fragments.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


async def _resolve(invocation: FunctionInvocation, settings: AppSettings) -> ResolutionResult:
    async with open_jira_search_client(settings) as jira:
        return await resolve(invocation, client=jira, settings=settings)


@app.command(name="resolve")
def resolve_command(
    argument: str = typer.Argument(..., help='Function argument, e.g. "linked[blocks->outward]: project = ABC".'),
    operator: str = typer.Option("in", "--operator", "-o", help="Clause operator: 'in' or 'not in'."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON only."),
    output: Optional[Path] = typer.Option(None, "--output", help="Also write the result to a JSON file."),
) -> None:
    """Resolve ARGUMENT against Jira and print the resulting JQL fragment."""

    settings = AppSettings()
    setup_logging("jql_relations", level="WARNING" if as_json else settings.log_level)

    invocation = FunctionInvocation(operator=operator, arguments=[argument])
    result = asyncio.run(_resolve(invocation, settings))

    if output is not None:
        export_result_json(result=result, output_path=output)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, sort_keys=True))
    else:
        print_banner(_console)
        _console.print(build_result_table(result))
        _console.print(build_jql_panel(result))

    if result.error:
        raise typer.Exit(code=1)


def run() -> None:
    app()
