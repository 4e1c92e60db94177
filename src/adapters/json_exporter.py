"""Exportación JSON de una resolución.

Por qué JSON:
- Permite comparar fragmentos entre ejecuciones o adjuntarlos a un ticket.
- Conserva los metadatos (modo, filtro, contadores) que el harness descarta.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ResolutionResult


def export_result_json(*, result: ResolutionResult, output_path: Path) -> Path:
    """Exporta `ResolutionResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
