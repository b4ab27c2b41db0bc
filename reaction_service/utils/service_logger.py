"""Base service logger with shared components.

BaseServiceLogger routes plain messages through the logging module and
prints rich panels on the shared console. Process-specific loggers
subclass it and add their own event methods.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from reaction_service.utils.logging import console


class BaseServiceLogger(ABC):
    """Abstract base class for service loggers.

    Provides:
    - Shared console instance
    - Standard logging methods (info, warning, error, exception)
    - Summary panel helper

    Subclasses implement summary() and their own event methods.
    """

    def __init__(self, logger_name: str | None = None) -> None:
        """Initialize the service logger.

        Args:
            logger_name: Name for the Python logger. If None, uses the subclass module.
        """
        self.console: Console = console
        self._logger = logging.getLogger(logger_name or self.__class__.__module__)

    # -------------------------------------------------------------------------
    # Standard Logging (goes through Python logging)
    # -------------------------------------------------------------------------

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def exception(self, message: str) -> None:
        """Log an error message with the active exception's traceback."""
        self._logger.exception(message)

    def success(self, message: str) -> None:
        """Log a success message with green checkmark."""
        self.console.print(f"[green]✓[/green] {message}")

    # -------------------------------------------------------------------------
    # Summary Panel
    # -------------------------------------------------------------------------

    def _print_summary_table(
        self,
        title: str,
        rows: list[tuple[str, str | int]],
        *,
        style: str = "cyan",
    ) -> None:
        """Print a summary panel.

        Args:
            title: Panel title
            rows: List of (label, value) tuples
            style: Border color style (default: cyan)
        """
        self.console.print()

        table = Table.grid(padding=(0, 2))
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right", style="green")

        for label, value in rows:
            if isinstance(value, int):
                table.add_row(label, f"{value:,}")
            else:
                table.add_row(label, str(value))

        panel = Panel(
            table,
            title=f"[bold]{title}[/bold]",
            border_style=style,
            padding=(1, 2),
        )
        self.console.print(panel)

    def print_summary(
        self,
        service_name: str,
        *,
        elapsed: float,
        stats: dict[str, int | str],
        extra_sections: dict[str, dict[str, int]] | None = None,
        style: str = "cyan",
    ) -> None:
        """Print a service summary.

        Args:
            service_name: Name of the service
            elapsed: Time elapsed in seconds
            stats: Main statistics as {label: value}
            extra_sections: Optional nested sections, e.g. per topic
            style: Border color style
        """
        rows: list[tuple[str, str | int]] = list(stats.items())

        if extra_sections:
            for section_name, section_stats in extra_sections.items():
                rows.append((f"[dim]{section_name}[/dim]", ""))
                for label, value in section_stats.items():
                    rows.append((f"  {label}", value))

        rows.append(("Time elapsed", f"{elapsed:.1f}s"))

        self._print_summary_table(f"{service_name} Stopped", rows, style=style)

    @abstractmethod
    def summary(self, **kwargs: Any) -> None:
        """Print final summary. Implementation varies by service."""
        ...
