"""Logging configuration shared by the CLI commands"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVEL_ENV = "MDSITE_LOG_LEVEL"

console = Console(stderr=True)


def _resolve_level(verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(verbose: bool = False) -> None:
    """Attach a single Rich handler to the mdsite logger; safe to call repeatedly."""
    logger = logging.getLogger("mdsite")
    logger.setLevel(_resolve_level(verbose))
    if any(getattr(h, "_mdsite_managed", False) for h in logger.handlers):
        return
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._mdsite_managed = True
    logger.addHandler(handler)
    logger.propagate = False
