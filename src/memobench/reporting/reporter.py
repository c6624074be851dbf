"""Console reporter: the SuiteCallback that renders progress and ranked tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from memobench.console import get_console
from memobench.domain.models import SuiteDefinition, TrialResult
from memobench.errors import BenchmarkError
from memobench.reporting.ranker import HEADERS, format_row, rank

if TYPE_CHECKING:
    from collections.abc import Iterable

    from memobench.console._protocol import ConsoleProtocol

SPINNER_TEXT = "Running benchmark"


def report(results: Iterable[TrialResult], console: ConsoleProtocol) -> list[TrialResult]:
    """Rank *results* and write them to *console* as one table."""
    ranked = rank(results)
    console.table(HEADERS, [format_row(r) for r in ranked])
    return ranked


class ConsoleReporter:
    """Bridges the SuiteCallback protocol to a ConsoleProtocol backend."""

    def __init__(self, console: ConsoleProtocol | None = None) -> None:
        self._console = console if console is not None else get_console()

    def on_suite_start(self, suite: SuiteDefinition) -> None:
        self._console.suite_header(f"Starting cycles for {suite.description}...")
        self._console.spinner_start(SPINNER_TEXT)

    def on_candidate_measured(self, suite: SuiteDefinition, result: TrialResult) -> None:
        self._console.success(result.name)

    def on_suite_complete(self, suite: SuiteDefinition, results: list[TrialResult]) -> None:
        self._console.spinner_stop()
        report(results, self._console)

    def on_suite_cancelled(self, suite: SuiteDefinition) -> None:
        self._console.spinner_stop()
        self._console.warning(f"Suite '{suite.name}' cancelled")

    def on_suite_failed(self, suite: SuiteDefinition, error: Exception) -> None:
        self._console.spinner_stop()
        if isinstance(error, BenchmarkError):
            self._console.error(f"Suite '{suite.name}' aborted: {error}")
        else:
            self._console.error(f"Suite '{suite.name}' aborted: {type(error).__name__}: {error}")
