"""Logging helpers.

Cada módulo obtiene su logger con `get_logger(__name__)`; la CLI configura
una única vez el handler (Rich) y el nivel.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "chartspoint"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Logger hijo de `chartspoint` para que un solo handler cubra todo el árbol."""

    if name.startswith(_ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Instala un `RichHandler` en el logger raíz del proyecto (idempotente)."""

    global _configured

    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(level.upper())
    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True
    return root
