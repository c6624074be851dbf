"""Trial runner: measures every candidate of one suite, one at a time."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from memobench.domain.models import TimedOperation, TrialResult
from memobench.domain.protocols import TimingEngine, TrialListener
from memobench.errors import MeasurementError

logger = logging.getLogger(__name__)


def _bind(candidate: Callable[..., Any], args: tuple[Any, ...]) -> Callable[[], object]:
    def operation() -> object:
        return candidate(*args)

    return operation


class TrialRunner:
    """Feeds candidates to the timing engine and turns its events into results."""

    def __init__(self, engine: TimingEngine) -> None:
        self._engine = engine

    async def run(
        self,
        candidates: Mapping[str, Callable[..., Any]],
        args: tuple[Any, ...],
        listener: TrialListener,
        suite: str = "",
    ) -> list[TrialResult]:
        """Time each candidate with the same *args* tuple.

        ``listener.on_cycle`` fires after each candidate, before the next
        one starts; ``listener.on_complete`` fires once at the end.
        """
        operations = [TimedOperation(name, _bind(fn, args)) for name, fn in candidates.items()]
        results: list[TrialResult] = []

        async for event in self._engine.run(operations):
            if event.type == "cycle":
                result = TrialResult.from_cycle(event)
                logger.info(
                    "%s: %.0f ops/sec ±%.2f%% (%d samples)",
                    result.name,
                    result.ops_per_second,
                    result.relative_margin_of_error,
                    result.sample_size,
                )
                results.append(result)
                listener.on_cycle(result)
            elif event.type == "error":
                msg = f"raised {type(event.error).__name__}: {event.error}"
                raise MeasurementError(event.name, suite, msg) from event.error
            elif event.type == "complete":
                logger.debug("Timing engine finished %d candidates", len(results))

        measured = [r.name for r in results]
        if measured != list(candidates):
            missing = [name for name in candidates if name not in measured]
            name = missing[0] if missing else (measured[-1] if measured else "")
            raise MeasurementError(name, suite, "timing engine did not report every candidate")

        listener.on_complete(results)
        return results
