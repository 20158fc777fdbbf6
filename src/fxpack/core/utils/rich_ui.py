"""
Rich UI components for logging and build output in fxpack.
This module provides Rich-based alternatives to standard logging output.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

LOG_FORMAT = "%(asctime)s | %(levelname)-5s | %(message)s"
DEBUG_LOG_FORMAT = (
    "%(asctime)s | %(levelname)-5s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
)


def is_rich_enabled() -> bool:
    """Check if Rich logging should be enabled based on environment"""
    return os.environ.get("FXPACK_RICH_UI", "false").lower() in ("true", "1", "yes")


class RichLoggingFilter(logging.Filter):
    """Filter to suppress verbose third-party logs when Rich UI is active"""

    def filter(self, record):
        if record.levelno <= logging.INFO and record.name.startswith(
            ("asyncio", "urllib3")
        ):
            return False
        return True


def get_rich_handler(console: Optional[Console] = None) -> RichHandler:
    """Rich logging handler used when FXPACK_RICH_UI is enabled"""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.addFilter(RichLoggingFilter())
    return handler


def status_text(success: bool) -> str:
    return "[green]✓ built[/green]" if success else "[red]✗ failed[/red]"


def create_build_summary(results) -> Table:
    """Create a summary table from a ``{name: BuildResult}`` mapping"""
    table = Table(title="Build Summary")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Status", justify="center")
    table.add_column("Imports", style="magenta")
    table.add_column("Message")

    for name, result in results.items():
        table.add_row(
            name,
            status_text(result.success),
            ", ".join(result.resource_inclusions) or "-",
            result.message or "",
        )

    return table


def create_empty_panel(source_dir: str) -> Panel:
    return Panel(
        f"No resources found under [bold]{source_dir}[/bold]\n\n"
        "Resources are directories containing a manifest.yaml.",
        title="fxpack",
        expand=False,
    )
