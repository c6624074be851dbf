"""Core data models for memobench."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

KeyFunction = Callable[[Any], Hashable]


class Shape(Enum):
    """Calling-convention shape of a workload."""

    SINGLE_PRIMITIVE = "single-primitive"
    SINGLE_STRUCTURED = "single-structured"
    MULTI_PRIMITIVE = "multi-primitive"
    MULTI_STRUCTURED = "multi-structured"
    CUSTOM_EQUALITY = "custom-equality"


class RunState(Enum):
    """Lifecycle of a suite run sequence."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    STOPPED = "stopped"
    ABORTED = "aborted"


# ---------------------------------------------------------------------------
# Workload arguments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FibonacciInput:
    """Record wrapper around a Fibonacci index."""

    number: int


@dataclass(frozen=True)
class Completion:
    """Structured completion flag for the two-argument workload."""

    is_complete: bool


@dataclass
class NumberBox:
    """Mutable, unhashable record.

    Caches can only match it through an injected key function.
    """

    number: int


@dataclass(frozen=True)
class Workload:
    """A pure function plus the shape of its arguments."""

    name: str
    shape: Shape
    fn: Callable[..., int]
    description: str
    make_args: Callable[[int], tuple[Any, ...]]


# ---------------------------------------------------------------------------
# Timing engine events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SampleStats:
    """Summary statistics of one completed measurement."""

    rme: float
    sample: tuple[float, ...]


@dataclass(frozen=True)
class TimedOperation:
    """A named zero-argument callable handed to the timing engine."""

    name: str
    fn: Callable[[], object]


@dataclass(frozen=True)
class EngineEvent:
    """An event emitted by the timing engine.

    ``type`` is one of ``"cycle"``, ``"error"`` or ``"complete"``.
    """

    type: str
    name: str = ""
    hz: float = 0.0
    stats: SampleStats | None = None
    error: BaseException | None = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrialResult:
    """Finalized throughput statistics for one candidate within one suite."""

    name: str
    ops_per_second: float
    relative_margin_of_error: float
    sample_size: int

    @classmethod
    def from_cycle(cls, event: EngineEvent) -> TrialResult:
        """Build a result from a timing engine ``cycle`` event."""
        if event.type != "cycle" or event.stats is None:
            msg = f"expected a cycle event with stats, got {event.type!r}"
            raise ValueError(msg)
        return cls(
            name=event.name,
            ops_per_second=event.hz,
            relative_margin_of_error=event.stats.rme,
            sample_size=len(event.stats.sample),
        )


# ---------------------------------------------------------------------------
# Suites
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CandidateOptions:
    """Per-suite options passed to the candidate registry."""

    custom_keys: Mapping[str, KeyFunction] = field(default_factory=lambda: dict[str, KeyFunction]())
    only: tuple[str, ...] = ()


@dataclass(frozen=True)
class SuiteDefinition:
    """One workload shape with its fixed representative input."""

    name: str
    workload: Workload
    number: int
    options: CandidateOptions = field(default_factory=CandidateOptions)

    @property
    def description(self) -> str:
        return self.workload.description

    def make_args(self) -> tuple[Any, ...]:
        return self.workload.make_args(self.number)


@dataclass(frozen=True)
class PreparedSuite:
    """A suite whose candidates have been registered."""

    definition: SuiteDefinition
    candidates: Mapping[str, Callable[..., Any]]
    args: tuple[Any, ...]

    @property
    def name(self) -> str:
        return self.definition.name


@dataclass
class SuiteRun:
    """Result accumulation for the suite currently being measured."""

    suite: str
    results: list[TrialResult] = field(default_factory=lambda: list[TrialResult]())
    completed: bool = False
