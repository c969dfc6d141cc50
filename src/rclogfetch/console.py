from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# stdout may carry the fetched entries; everything human-facing goes to stderr
console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route the package loggers through rich on stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("rclogfetch")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False
    # keep httpx request lines out of normal runs
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
