"""Plain-text backend for pipes, CI logs and ``--backend plain``."""

from __future__ import annotations

_INDENT = "  "
_GAP = "  "


def _fit(cell: str, width: int, column: int) -> str:
    # Label column reads left to right; numeric columns line up on the right
    return cell.ljust(width) if column == 0 else cell.rjust(width)


def render_table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """Lay out *rows* under *headers* as fixed-width text lines.

    Short rows are padded with empty cells.
    """
    ncols = len(headers)
    grid = [list(headers)] + [[*r, *[""] * (ncols - len(r))][:ncols] for r in rows]
    widths = [max(len(line[c]) for line in grid) for c in range(ncols)]

    lines = []
    for index, line in enumerate(grid):
        cells = (_fit(cell, widths[c], c) for c, cell in enumerate(line))
        lines.append((_INDENT + _GAP.join(cells)).rstrip())
        if index == 0:
            lines.append(_INDENT + _GAP.join("-" * w for w in widths))
    return lines


class PlainBackend:
    """ConsoleProtocol over ``print()``. Nothing is redrawn in place."""

    def info(self, message: str) -> None:
        print(_INDENT + message)

    def success(self, message: str) -> None:
        print(f"{_INDENT}[ok] {message}")

    def warning(self, message: str) -> None:
        print(f"{_INDENT}[warn] {message}")

    def error(self, message: str) -> None:
        print(f"{_INDENT}[error] {message}")

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        if title:
            print(f"\n{_INDENT}{title}:")
        if headers:
            print("\n".join(render_table(headers, rows)))

    def suite_header(self, message: str) -> None:
        print(f"\n{message}")

    def spinner_start(self, message: str) -> None:
        print(f"{_INDENT}{message}...", flush=True)

    def spinner_stop(self) -> None:
        # The start line stays in the log; there is nothing to erase
        return None
