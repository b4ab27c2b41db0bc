"""Logging setup shared by every reaction service entry point.

- One shared rich Console for all terminal output
- Root logger configured with a RichHandler on that console
- Optional plain-text log file

Usage:
    from reaction_service.utils.logging import setup_logging
    import logging

    setup_logging(level=logging.DEBUG)
    logger = logging.getLogger(__name__)
    logger.info("Hello")

Call setup_logging() once at process startup, never at import time.
Modules log through logging.getLogger(__name__).
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


# Shared by RichHandler and every rich panel/table printed by the service.
console = Console()

# Libraries that are noisy at INFO/DEBUG
THIRD_PARTY_LOGGERS: dict[str, int] = {
    "sqlalchemy.engine": logging.INFO,
    "asyncpg": logging.DEBUG,
    "redis": logging.DEBUG,
}


def level_from_flags(verbose: bool = False, debug: bool = False) -> tuple[int, bool]:
    """Map CLI flags to (log level, debug_third_party)."""
    if debug:
        return logging.DEBUG, True
    if verbose:
        return logging.DEBUG, False
    return logging.INFO, False


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
    debug_third_party: bool = False,
) -> None:
    """Configure the root logger with a RichHandler on the shared console.

    Args:
        level: Logging level for the root logger (default: INFO)
        log_file: Optional path to a log file for persistent logging
        debug_third_party: If True, let database and redis drivers log verbosely
    """
    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    # force=True replaces handlers installed by anything imported earlier
    logging.basicConfig(
        level=level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    for name, verbose_level in THIRD_PARTY_LOGGERS.items():
        logging.getLogger(name).setLevel(
            verbose_level if debug_third_party else logging.WARNING
        )
