"""Terminal output for memobench.

Modules print through the shared proxy::

    from memobench.console import console

    console.suite_header("Starting cycles for ...")
    console.table(HEADERS, rows)

``cli.main`` picks the backend once, before anything is printed::

    from memobench.console import configure

    configure(backend=settings.console)  # "auto", "rich" or "plain"
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

from memobench.console._plain import PlainBackend

if TYPE_CHECKING:
    from memobench.console._protocol import ConsoleProtocol


def _rich_backend() -> ConsoleProtocol:
    # rich is imported lazily so plain output never pays for it
    from memobench.console._rich import RichBackend

    return RichBackend()


_FACTORIES: dict[str, Callable[[], ConsoleProtocol]] = {
    "plain": PlainBackend,
    "rich": _rich_backend,
}

_backend: ConsoleProtocol = PlainBackend()


def configure(*, backend: str = "auto") -> None:
    """Install the backend named *backend*.

    ``"auto"`` resolves to rich on a terminal and plain text otherwise,
    so piped output and CI logs stay free of control codes.
    """
    global _backend  # noqa: PLW0603

    name = backend
    if name == "auto":
        name = "rich" if sys.stdout.isatty() else "plain"
    factory = _FACTORIES.get(name)
    if factory is None:
        raise ValueError(f"unknown console backend: {backend!r}")
    _backend = factory()


def get_console() -> ConsoleProtocol:
    return _backend


class _ConsoleProxy:
    """Looks up every attribute on whichever backend is installed right now."""

    def __getattr__(self, name: str) -> object:
        return getattr(_backend, name)


console: ConsoleProtocol = _ConsoleProxy()  # type: ignore[assignment]
