"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.jira_search import open_jira_search_client
from core.config import AppSettings, write_user_env_vars
from core.exceptions import SearchError, SearchProtocolUnavailable

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_protocol(settings: AppSettings, protocol: str) -> tuple[bool, str]:
    """Issue a one-issue search to see whether a search protocol answers."""

    try:
        async with open_jira_search_client(settings) as jira:
            if protocol == "enhanced":
                data = await jira.search_enhanced(jql="order by created DESC", fields=["parent"], max_results=1)
            else:
                data = await jira.search_legacy(jql="order by created DESC", fields=["parent"], start_at=0, max_results=1)
        return True, f"{len(data.get('issues') or [])} issue(s) returned"
    except SearchProtocolUnavailable:
        return False, "Endpoint not found (legacy fallback will be used)"
    except SearchError as exc:
        return False, f"HTTP {exc.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="jql-relations Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Jira base_url", "OK", settings.jira_base_url)
    if settings.jira_bearer_token:
        table.add_row("Credentials", "OK", "Bearer token")
    elif settings.jira_email and settings.jira_api_token:
        table.add_row("Credentials", "OK", f"Basic auth as {settings.jira_email}")
    else:
        table.add_row("Credentials", "MISSING", "Run `doctor setup-jira` -> anonymous requests")
    table.add_row(
        "Caps",
        "OK",
        f"{settings.page_cap} pages x {settings.page_size} issues, {settings.max_result_keys} keys",
    )

    # Connectivity (best-effort)
    for protocol in ("enhanced", "legacy"):
        ok, detail = asyncio.run(_check_protocol(settings, protocol))
        table.add_row(f"Search ({protocol})", "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command(name="setup-jira")
def setup_jira() -> None:
    """Interactive Jira setup (stores config in the user config .env)."""

    base_url = typer.prompt("Jira base URL (https://<site>.atlassian.net)").strip()
    email = typer.prompt("Account e-mail").strip()
    api_token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not email or not api_token:
        raise typer.BadParameter("base_url, e-mail and API token are required")

    env_path = write_user_env_vars(
        {
            "JQL_RELATIONS_JIRA_BASE_URL": base_url,
            "JQL_RELATIONS_JIRA_EMAIL": email,
            "JQL_RELATIONS_JIRA_API_TOKEN": api_token,
        }
    )

    _console.print(f"[green]Saved Jira config to:[/green] {env_path}")
