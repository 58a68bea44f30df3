"""
Rich logging for cvflow.

Provides colourful console logging and summary tables using the rich library.
"""

import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table


class RichLogger:
    """
    Logging with rich formatting and colors.
    """

    def __init__(self, name: str = "cvflow", level: str = "INFO", console: Optional[Console] = None):
        """
        Initialize rich logger.

        Args:
            name: Logger name
            level: Log level
            console: Console to write to (defaults to stderr)
        """
        self.name = name
        self.level = level
        self.console = console or Console(stderr=True)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.handlers.clear()
        self.logger.addHandler(_rich_handler(self.console))
        self.logger.propagate = False

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def success(self, message: str):
        """Log success message with rich formatting."""
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def failure(self, message: str):
        """Log failure message with rich formatting."""
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def pages_table(self, pages: Sequence):
        """Display one row per page: number, cursors, height and sections."""
        table = Table(title="Pages")
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Start")
        table.add_column("End")
        table.add_column("Height", justify="right", style="magenta")
        table.add_column("Sections")

        for page in pages:
            height = f"{page.content_height:.1f} / {page.capacity:.1f}"
            if page.overflows:
                height = f"[red]{height}[/red]"
            parts = ", ".join(
                f"{escape(part.section_title or part.section_type.value)}"
                f"[{part.row_indices.start}:{part.row_indices.stop}]"
                for part in page.sections
            )
            table.add_row(str(page.number), str(page.start_cursor), str(page.end_cursor), height, parts)

        self.console.print(table)


def _rich_handler(console: Console) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def setup_logging(level: str = "INFO", use_rich: bool = True):
    """
    Setup logging for the application.

    Args:
        level: Log level
        use_rich: Whether to use rich logging
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if use_rich:
        root_logger.addHandler(_rich_handler(Console(stderr=True)))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(handler)
