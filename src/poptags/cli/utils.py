"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from poptags.exceptions import TemplateError

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the poptags CLI.

    Log levels:
    - Normal: only warnings/errors (missing includes, layouts, extensions)
    - Verbose (-v): INFO
    - Debug (POPTAGS_DEBUG=1): DEBUG, including compile and resolution traces
    """
    if os.environ.get("POPTAGS_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=bool(os.environ.get("POPTAGS_DEBUG")),
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("poptags")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def handle_error(error: Exception) -> NoReturn:
    """Report a template error (or anything unexpected) and exit."""
    if isinstance(error, TemplateError):
        typer.echo(f"Error: {error}", err=True)
    else:
        typer.echo(f"Unexpected error: {error}", err=True)
    sys.exit(1)
