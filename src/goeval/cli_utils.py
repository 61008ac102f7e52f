"""Shared CLI utilities for goeval.

This module contains exit codes, console singletons, and helper functions
used by the CLI entry point.
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Exit codes following Unix conventions
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1  # Compile/run failure or malformed snippet
EXIT_CONFIG_ERROR: int = 2  # Configuration/usage error
EXIT_SIGINT: int = 130  # 128 + SIGINT (2) - Interrupted by Ctrl+C

# Environment override for the log level
LOG_LEVEL_ENV_VAR: str = "GOEVAL_LOG_LEVEL"

# Diagnostics and logs go to stderr so program output stays clean on stdout
_is_tty = sys.stderr.isatty()
err_console = Console(stderr=True, force_terminal=_is_tty, no_color=not _is_tty)

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    """Display error message with red styling.

    Args:
        message: Error message to display.

    """
    err_console.print(f"[red]Error:[/red] {message}")


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags.

    Args:
        verbose: If True, set DEBUG level.
        quiet: If True, set ERROR level.

    Note:
        verbose and quiet are mutually exclusive. If both are True,
        verbose takes precedence.

        GOEVAL_LOG_LEVEL env var overrides both flags.

    """
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
    if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = getattr(logging, env_level)
    elif verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    # Clear any existing handlers to avoid duplicates
    logging.root.handlers.clear()

    # Create handler with explicit level (basicConfig doesn't set handler level)
    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def read_stdin() -> str:
    """Read a snippet from stdin until EOF.

    Prompts on stderr when stdin is an interactive terminal.

    Returns:
        Everything read from stdin.

    """
    if sys.stdin.isatty():
        err_console.print("Enter one or more lines and hit ctrl-D")
    return sys.stdin.read()
