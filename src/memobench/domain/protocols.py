"""Protocol interfaces for memobench components."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from memobench.domain.models import (
    EngineEvent,
    SuiteDefinition,
    TimedOperation,
    TrialResult,
)


class TimingEngine(Protocol):
    """Measures named operations one at a time and streams events."""

    def run(self, operations: Sequence[TimedOperation]) -> AsyncIterator[EngineEvent]:
        """Yield one ``cycle`` event per operation, then ``complete``."""
        ...


class TrialListener(Protocol):
    """Receives trial lifecycle events from the TrialRunner."""

    def on_cycle(self, result: TrialResult) -> None:
        """Called as soon as one candidate's measurement is complete."""
        ...

    def on_complete(self, results: list[TrialResult]) -> None:
        """Called once after every candidate has been measured."""
        ...


class SuiteCallback(Protocol):
    """Reporting sink for suite lifecycle events."""

    def on_suite_start(self, suite: SuiteDefinition) -> None:
        """Called before any candidate of *suite* is measured."""
        ...

    def on_candidate_measured(self, suite: SuiteDefinition, result: TrialResult) -> None:
        """Called after each candidate's cycle."""
        ...

    def on_suite_complete(self, suite: SuiteDefinition, results: list[TrialResult]) -> None:
        """Called with results in measurement order once the suite finishes."""
        ...

    def on_suite_failed(self, suite: SuiteDefinition, error: Exception) -> None:
        """Called when a fatal error aborts the suite."""
        ...

    def on_suite_cancelled(self, suite: SuiteDefinition) -> None:
        """Called when the task running *suite* is cancelled, e.g. on Ctrl-C."""
        ...
