"""Logging setup: module loggers under ``scribe`` with a Rich console handler."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Diagnostics go to stderr so they never mix with `scribe list` output
console = Console(stderr=True)

_ROOT = "scribe"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach the Rich handler to the package logger and set its level.

    WARNING by default, DEBUG with ``verbose``. Safe to call repeatedly.
    """
    root = logging.getLogger(_ROOT)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a module logger; handlers live on the package logger."""
    return logging.getLogger(name)
