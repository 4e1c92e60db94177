"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/Jira) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "jql-relations"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "jql-relations"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "jql-relations"
    return Path.home() / ".config" / "jql-relations"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# jql-relations user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="JQL_RELATIONS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    jira_base_url: str = Field(
        default="https://your-domain.atlassian.net",
        min_length=8,
        description="Base URL del sitio Jira Cloud.",
    )
    jira_email: str | None = Field(
        default=None,
        description="Cuenta técnica (identidad 'as app') para basic auth.",
    )
    jira_api_token: str | None = Field(
        default=None,
        description="API token asociado a `jira_email`.",
    )
    jira_bearer_token: str | None = Field(
        default=None,
        description="Token bearer alternativo (OAuth/app). Tiene prioridad sobre basic auth.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="jql-relations/0.1",
        min_length=1,
        description="User-Agent para las búsquedas contra Jira.",
    )

    page_cap: int = Field(
        default=4,
        ge=1,
        le=50,
        description="Máximo de páginas de búsqueda por invocación.",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Issues por página (Jira limita a 100).",
    )
    max_result_keys: int = Field(
        default=1000,
        ge=1,
        description="Máximo de claves en el fragmento JQL devuelto.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
