"""Suite orchestration: runs suites strictly one after another."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from memobench.candidates.registry import register_candidates
from memobench.domain.models import (
    CandidateOptions,
    PreparedSuite,
    RunState,
    SuiteDefinition,
    SuiteRun,
    TrialResult,
    Workload,
)
from memobench.domain.protocols import SuiteCallback
from memobench.runner.trial import TrialRunner

logger = logging.getLogger(__name__)

Registrar = Callable[[Workload, CandidateOptions], Mapping[str, Callable[..., Any]]]


class _SuiteListener:
    """Routes trial events into the current SuiteRun and on to the callback."""

    def __init__(self, suite: SuiteDefinition, run: SuiteRun, callback: SuiteCallback) -> None:
        self._suite = suite
        self._run = run
        self._callback = callback

    def on_cycle(self, result: TrialResult) -> None:
        self._run.results.append(result)
        self._callback.on_candidate_measured(self._suite, result)

    def on_complete(self, results: list[TrialResult]) -> None:
        self._run.completed = True


class SuiteOrchestrator:
    """Drives a suite run sequence: IDLE -> RUNNING -> COMPLETE.

    Candidates for every suite are registered up front, so configuration
    errors surface before anything is timed. A fatal error in any suite
    moves to ABORTED and halts the sequence.
    """

    def __init__(
        self,
        runner: TrialRunner,
        callback: SuiteCallback,
        registrar: Registrar = register_candidates,
    ) -> None:
        self._runner = runner
        self._callback = callback
        self._registrar = registrar
        self._state = RunState.IDLE
        self._current_index = -1
        self._stop_requested = False

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def current_index(self) -> int:
        return self._current_index

    def prepare(self, suites: Sequence[SuiteDefinition]) -> list[PreparedSuite]:
        """Register candidates and capture the input for every suite."""
        prepared: list[PreparedSuite] = []
        for suite in suites:
            try:
                candidates = self._registrar(suite.workload, suite.options)
            except Exception as exc:
                logger.error("Registration failed for suite %s: %s", suite.name, exc)
                self._state = RunState.ABORTED
                self._callback.on_suite_failed(suite, exc)
                raise
            prepared.append(
                PreparedSuite(definition=suite, candidates=candidates, args=suite.make_args())
            )
        return prepared

    async def run(self, suites: Sequence[SuiteDefinition]) -> list[SuiteRun]:
        """Run *suites* in order and return one SuiteRun per completed suite."""
        if self._state is RunState.RUNNING:
            raise RuntimeError("orchestrator is already running")

        self._stop_requested = False
        self._current_index = -1
        prepared = self.prepare(suites)
        self._state = RunState.RUNNING
        completed: list[SuiteRun] = []

        for index, suite in enumerate(prepared):
            if self._stop_requested:
                logger.info("Stop requested; skipping %d remaining suite(s)", len(prepared) - index)
                self._state = RunState.STOPPED
                return completed
            self._current_index = index
            completed.append(await self._run_suite(suite))

        self._state = RunState.COMPLETE
        return completed

    async def _run_suite(self, suite: PreparedSuite) -> SuiteRun:
        run = SuiteRun(suite=suite.name)
        logger.info("Starting suite %s (%d candidates)", suite.name, len(suite.candidates))
        self._callback.on_suite_start(suite.definition)

        listener = _SuiteListener(suite.definition, run, self._callback)
        try:
            await self._runner.run(suite.candidates, suite.args, listener, suite=suite.name)
        except asyncio.CancelledError:
            logger.warning("Suite %s cancelled", suite.name)
            self._state = RunState.ABORTED
            self._callback.on_suite_cancelled(suite.definition)
            raise
        except Exception as exc:
            logger.error("Suite %s aborted: %s", suite.name, exc)
            self._state = RunState.ABORTED
            self._callback.on_suite_failed(suite.definition, exc)
            raise

        self._callback.on_suite_complete(suite.definition, run.results)
        logger.info("Suite %s complete", suite.name)
        return run

    def stop(self) -> None:
        """Prevent the next suite from starting. The current suite still finishes."""
        self._stop_requested = True
