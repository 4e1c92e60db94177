"""Logging del resolver.

Por qué un módulo propio:
- La CLI configura el logging raíz; el harness suele traer el suyo y no se pisa.
- Cada invocación etiqueta sus líneas con un id corto para poder seguirla en
  un sink compartido con otras consultas JQL.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, MutableMapping

LOG_FORMAT = "%(asctime)s  %(name)-32s  %(levelname)-7s  %(message)s"


def setup_logging(name: str, level: str = "INFO") -> logging.Logger:
    """Ajusta el nivel raíz y añade un handler de consola si no hay ninguno."""

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logging.getLogger(name)


class InvocationLogger(logging.LoggerAdapter):
    """Prefija cada mensaje con `[<invocation_id>]`."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.extra['invocation_id']}] {msg}", kwargs


def invocation_logger(logger: logging.Logger) -> InvocationLogger:
    """Logger de una sola invocación, con un id nuevo."""

    return InvocationLogger(logger, {"invocation_id": uuid.uuid4().hex[:12]})
