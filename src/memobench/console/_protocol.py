"""Output contract shared by the rich and plain backends."""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """What the reporter and CLI may print.

    Tables take pre-formatted string cells; the first column is a label
    and the rest are numbers, which backends align to the right.
    """

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None:
        """A candidate finished measuring, or another positive outcome."""
        ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None:
        """A suite or the whole run was aborted."""
        ...

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None: ...

    def suite_header(self, message: str) -> None:
        """Blank line, then *message*, before a suite's first candidate."""
        ...

    def spinner_start(self, message: str) -> None:
        """Show *message* as in-progress until ``spinner_stop``."""
        ...

    def spinner_stop(self) -> None:
        """Clear the in-progress indicator. Safe to call when none is shown."""
        ...
