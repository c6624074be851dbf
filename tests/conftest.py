"""Shared pytest fixtures for memobench tests.

Provides a scripted timing engine, a recording suite callback and the
synthetic candidates (passthrough, unbounded map, always-miss) used by
the runner, orchestrator and end-to-end tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from memobench.domain.models import (
    EngineEvent,
    SampleStats,
    SuiteDefinition,
    TimedOperation,
    TrialResult,
)
from memobench.suites import make_suite

# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeEngine:
    """TimingEngine that calls each operation once and reports scripted stats.

    ``log`` records ``("invoke", name)`` entries so tests can check that
    operations never interleave with listener callbacks.
    """

    def __init__(
        self,
        hz: dict[str, float] | None = None,
        *,
        fail_on: str | None = None,
        skip: str | None = None,
        log: list[tuple[str, str]] | None = None,
    ) -> None:
        self._hz = hz or {}
        self._fail_on = fail_on
        self._skip = skip
        self.log: list[tuple[str, str]] = log if log is not None else []
        self.returned: dict[str, list[object]] = {}

    async def run(self, operations: Sequence[TimedOperation]) -> AsyncIterator[EngineEvent]:
        for op in operations:
            if op.name == self._skip:
                continue
            self.log.append(("invoke", op.name))
            if op.name == self._fail_on:
                yield EngineEvent(type="error", name=op.name, error=RuntimeError("boom"))
                return
            self.returned.setdefault(op.name, []).append(op.fn())
            self.returned[op.name].append(op.fn())
            stats = SampleStats(rme=1.5, sample=(0.001,) * 7)
            yield EngineEvent(type="cycle", name=op.name, hz=self._hz.get(op.name, 1000.0), stats=stats)
        yield EngineEvent(type="complete")


class RecordingListener:
    """TrialListener that appends to a shared log."""

    def __init__(self, log: list[tuple[str, str]] | None = None) -> None:
        self.log: list[tuple[str, str]] = log if log is not None else []
        self.completed: list[list[TrialResult]] = []

    def on_cycle(self, result: TrialResult) -> None:
        self.log.append(("cycle", result.name))

    def on_complete(self, results: list[TrialResult]) -> None:
        self.log.append(("complete", ""))
        self.completed.append(list(results))


class RecordingCallback:
    """SuiteCallback that records every lifecycle event in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.completed: dict[str, list[TrialResult]] = {}
        self.failures: list[tuple[str, Exception]] = []

    def on_suite_start(self, suite: SuiteDefinition) -> None:
        self.events.append(("start", suite.name))

    def on_candidate_measured(self, suite: SuiteDefinition, result: TrialResult) -> None:
        self.events.append(("measured", f"{suite.name}:{result.name}"))

    def on_suite_complete(self, suite: SuiteDefinition, results: list[TrialResult]) -> None:
        self.events.append(("complete", suite.name))
        self.completed[suite.name] = list(results)

    def on_suite_failed(self, suite: SuiteDefinition, error: Exception) -> None:
        self.events.append(("failed", suite.name))
        self.failures.append((suite.name, error))

    def on_suite_cancelled(self, suite: SuiteDefinition) -> None:
        self.events.append(("cancelled", suite.name))


# ---------------------------------------------------------------------------
# Synthetic candidates
# ---------------------------------------------------------------------------


def passthrough(fn: Callable[..., Any]) -> Callable[..., Any]:
    def wrapped(*args: Any) -> Any:
        return fn(*args)

    return wrapped


def map_cache(fn: Callable[..., Any]) -> Callable[..., Any]:
    cache: dict[tuple[Any, ...], Any] = {}

    def wrapped(*args: Any) -> Any:
        if args not in cache:
            cache[args] = fn(*args)
        return cache[args]

    return wrapped


def always_miss(fn: Callable[..., Any]) -> Callable[..., Any]:
    cache: dict[tuple[Any, ...], Any] = {}

    def wrapped(*args: Any) -> Any:
        cache.clear()
        cache[args] = fn(*args)
        return cache[args]

    return wrapped


def synthetic_candidates(fn: Callable[..., Any]) -> dict[str, Callable[..., Any]]:
    return {
        "passthrough": passthrough(fn),
        "map-cache": map_cache(fn),
        "always-miss": always_miss(fn),
    }


def make_result(name: str = "candidate", hz: float = 1000.0) -> TrialResult:
    return TrialResult(name=name, ops_per_second=hz, relative_margin_of_error=1.0, sample_size=10)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def recording_callback() -> RecordingCallback:
    return RecordingCallback()


@pytest.fixture
def small_suites() -> list[SuiteDefinition]:
    """The default four suites at a depth that keeps uncached calls cheap."""
    return [
        make_suite("single-primitive", 10),
        make_suite("single-structured", 10),
        make_suite("multi-primitive", 10),
        make_suite("multi-structured", 10),
    ]


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project
