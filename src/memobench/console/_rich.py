"""Rich backend: styled messages, aligned result tables and a live spinner."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.status import Status
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
        "suite": "bold magenta",
        "column": "bold",
    }
)

# level -> leading mark
_MARKS = {"info": "", "success": "✓ ", "warning": "⚠ ", "error": "✗ "}


class RichBackend:
    def __init__(self, console: Console | None = None) -> None:
        if console is None:
            console = Console(theme=_THEME, highlight=False)
        else:
            console.push_theme(_THEME)
        self._out = console
        self._status: Status | None = None

    def _say(self, level: str, message: str) -> None:
        self._out.print(f"  {_MARKS[level]}{message}", style=level)

    def info(self, message: str) -> None:
        self._say("info", message)

    def success(self, message: str) -> None:
        self._say("success", message)

    def warning(self, message: str) -> None:
        self._say("warning", message)

    def error(self, message: str) -> None:
        self._say("error", message)

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        grid = Table(
            title=title or None,
            box=box.SIMPLE_HEAD,
            header_style="column",
            show_edge=False,
        )
        for column, header in enumerate(headers):
            grid.add_column(header, justify="left" if column == 0 else "right", no_wrap=True)
        for row in rows:
            grid.add_row(*row)
        self._out.print(grid)

    def suite_header(self, message: str) -> None:
        self._out.line()
        self._out.print(message, style="suite")

    def spinner_start(self, message: str) -> None:
        """Show a spinner, replacing any spinner that is already running."""
        self.spinner_stop()
        self._status = self._out.status(message, spinner="dots")
        self._status.start()

    def spinner_stop(self) -> None:
        if self._status is None:
            return
        self._status.stop()
        self._status = None
