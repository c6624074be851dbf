"""Sampling timing engine.

Measures one operation at a time: calibrate a loop count, collect
samples until the time budget and minimum sample count are both met,
then report operations/second and the relative margin of error.
"""

from __future__ import annotations

import asyncio
import logging
import math
import statistics
import time
import timeit
from collections.abc import AsyncIterator, Callable, Sequence

from memobench.domain.models import EngineEvent, SampleStats, TimedOperation

logger = logging.getLogger(__name__)

# Two-sided 95% Student-t critical values by degrees of freedom.
T_TABLE: dict[int, float] = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571, 6: 2.447, 7: 2.365, 8: 2.306,
    9: 2.262, 10: 2.228, 11: 2.201, 12: 2.179, 13: 2.16, 14: 2.145, 15: 2.131, 16: 2.12,
    17: 2.11, 18: 2.101, 19: 2.093, 20: 2.086, 21: 2.08, 22: 2.074, 23: 2.069, 24: 2.064,
    25: 2.06, 26: 2.056, 27: 2.052, 28: 2.048, 29: 2.045, 30: 2.042,
}
T_INFINITY = 1.96

# Upper bound on loop count during calibration
MAX_LOOPS = 1 << 30


def critical_value(df: int) -> float:
    return T_TABLE.get(df, T_INFINITY)


def summarize(sample: Sequence[float]) -> tuple[float, SampleStats]:
    """Return ``(hz, stats)`` for *sample*, a sequence of seconds per call."""
    if not sample:
        raise ValueError("cannot summarize an empty sample")
    mean = statistics.fmean(sample)
    if mean <= 0:
        raise ValueError(f"non-positive mean period {mean!r}")
    n = len(sample)
    if n < 2:
        rme = 0.0
    else:
        sem = statistics.stdev(sample) / math.sqrt(n)
        rme = critical_value(n - 1) * sem / mean * 100
    return 1 / mean, SampleStats(rme=rme, sample=tuple(sample))


class SamplingEngine:
    """TimingEngine that measures operations sequentially in a worker thread."""

    def __init__(
        self,
        min_samples: int = 5,
        max_time: float = 5.0,
        min_sample_time: float = 0.05,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if min_samples < 1:
            raise ValueError("min_samples must be >= 1")
        if max_time <= 0 or min_sample_time <= 0:
            raise ValueError("max_time and min_sample_time must be positive")
        self._min_samples = min_samples
        self._max_time = max_time
        self._min_sample_time = min_sample_time
        self._clock = clock

    def _calibrate(self, timer: timeit.Timer) -> int:
        number = 1
        while number < MAX_LOOPS:
            if timer.timeit(number) >= self._min_sample_time:
                break
            number *= 2
        return number

    def measure(self, operation: TimedOperation) -> tuple[float, SampleStats]:
        """Measure *operation* synchronously and return ``(hz, stats)``."""
        timer = timeit.Timer(operation.fn, timer=self._clock)
        number = self._calibrate(timer)

        sample: list[float] = []
        start = self._clock()
        while len(sample) < self._min_samples or self._clock() - start < self._max_time:
            sample.append(timer.timeit(number) / number)

        logger.debug(
            "%s: %d samples of %d loops in %.2fs",
            operation.name,
            len(sample),
            number,
            self._clock() - start,
        )
        return summarize(sample)

    async def run(self, operations: Sequence[TimedOperation]) -> AsyncIterator[EngineEvent]:
        """Measure each operation in order, yielding cycle/error/complete events."""
        for op in operations:
            try:
                hz, stats = await asyncio.to_thread(self.measure, op)
            except Exception as exc:
                yield EngineEvent(type="error", name=op.name, error=exc)
                return
            yield EngineEvent(type="cycle", name=op.name, hz=hz, stats=stats)
        yield EngineEvent(type="complete")
