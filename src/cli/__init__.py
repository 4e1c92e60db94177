"""CLI (Typer + Rich) para ejecutar y diagnosticar el resolver."""
