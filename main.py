"""Atajo de desarrollo: `python main.py resolve "parent: project = ABC"`.

Sin `pip install -e .` los paquetes de `src/` (`core`, `adapters`, `cli`) no
están en el path; aquí se añaden antes de delegar en la app Typer.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import app  # noqa: PLC0415

    app(prog_name="jql-relations")


if __name__ == "__main__":
    main()
