"""CLI entry point for memobench.

Usage:
  memobench [--config PATH] [--suite NAME ...] [--custom-equality]
            [--number N] [--max-time S] [--min-samples N]
            [--backend {auto,rich,plain}]
  memobench --list
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from memobench.candidates.registry import describe_strategies
from memobench.config import CONSOLE_BACKENDS, Settings, load_settings
from memobench.console import configure, console
from memobench.errors import BenchmarkError
from memobench.reporting.reporter import ConsoleReporter
from memobench.runner.trial import TrialRunner
from memobench.scheduler.orchestrator import SuiteOrchestrator
from memobench.suites import DEFAULT_SEQUENCE, OPT_IN_SUITES, SUITE_SHAPES, build_sequence
from memobench.timing.engine import SamplingEngine

logger = logging.getLogger("memobench")


def _setup_logging(log_file: Path, level: str) -> None:
    """Configure file logging for the run."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memobench",
        description="Compare throughput of Python memoization libraries.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument(
        "--suite",
        action="append",
        choices=list(SUITE_SHAPES),
        help="run only this suite (repeatable)",
    )
    parser.add_argument(
        "--custom-equality",
        action="store_true",
        default=None,
        help="also run the opt-in custom-key suite",
    )
    parser.add_argument("--number", type=int, help="Fibonacci input depth")
    parser.add_argument("--max-time", type=float, help="seconds of sampling per candidate")
    parser.add_argument("--min-samples", type=int, help="minimum samples per candidate")
    parser.add_argument("--backend", choices=CONSOLE_BACKENDS, help="console output backend")
    parser.add_argument("--list", action="store_true", help="list suites and candidates, then exit")
    return parser


def cmd_list() -> None:
    """Show the available suites and strategies."""
    rows = [
        [name, "default" if name in DEFAULT_SEQUENCE else "opt-in"]
        for name in (*DEFAULT_SEQUENCE, *OPT_IN_SUITES)
    ]
    console.table(["Suite", "Run"], rows, title="Suites")
    console.table(
        ["Candidate", "Library", "Options", "Custom key option"],
        describe_strategies(),
        title="Candidates",
    )


async def run_benchmarks(settings: Settings) -> None:
    """Run the configured suite sequence to completion."""
    suites = build_sequence(
        settings.suites,
        number=settings.fibonacci_number,
        include_custom_equality=settings.include_custom_equality,
    )
    engine = SamplingEngine(
        min_samples=settings.min_samples,
        max_time=settings.max_time,
        min_sample_time=settings.min_sample_time,
    )
    orchestrator = SuiteOrchestrator(TrialRunner(engine), ConsoleReporter())
    await orchestrator.run(suites)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``memobench`` command."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config).with_overrides(
            suites=args.suite,
            include_custom_equality=args.custom_equality,
            fibonacci_number=args.number,
            max_time=args.max_time,
            min_samples=args.min_samples,
            console=args.backend,
        )
    except BenchmarkError as exc:
        configure(backend=args.backend or "auto")
        console.error(str(exc))
        return 1

    configure(backend=settings.console)

    if args.list:
        cmd_list()
        return 0

    _setup_logging(Path(settings.log_file), settings.log_level)
    logger.info("Starting run with %s", settings)

    try:
        asyncio.run(run_benchmarks(settings))
    except BenchmarkError as exc:
        logger.error("Run aborted: %s", exc)
        console.error(f"Run aborted: {exc}")
        return 1
    except KeyboardInterrupt:
        console.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
