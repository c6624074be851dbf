"""Candidate registry: wraps one workload with every strategy under test."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from memobench.candidates.strategies import CUSTOM_KEY_ADAPTERS, STRATEGIES, KeyAdapter, Strategy
from memobench.domain.models import CandidateOptions, Workload
from memobench.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _accepted_options(candidate: str, strategy: Strategy) -> set[str] | None:
    """Return the option names *strategy.entry* accepts, or None for ``**kwargs``."""
    try:
        params = inspect.signature(strategy.entry).parameters
    except (TypeError, ValueError) as exc:
        msg = f"cannot inspect options of {strategy.library}: {exc}"
        raise ConfigurationError(candidate, msg) from exc
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
        return None
    return set(params)


def _check_options(candidate: str, strategy: Strategy, options: Mapping[str, Any]) -> None:
    """Fail fast if *options* don't match what the library expects."""
    accepted = _accepted_options(candidate, strategy)
    if accepted is not None:
        unknown = sorted(k for k in options if k not in accepted)
        if unknown:
            msg = (
                f"{strategy.library} does not accept option(s) {', '.join(unknown)}; "
                f"expected one of {', '.join(sorted(accepted))}"
            )
            raise ConfigurationError(candidate, msg)

    if strategy.capacity_option is None:
        return
    if strategy.capacity_option not in options:
        msg = f"capacity option '{strategy.capacity_option}' is not set"
        raise ConfigurationError(candidate, msg)
    value = options[strategy.capacity_option]
    if not (value is None or (type(value) is dict and not value)):
        msg = f"capacity option '{strategy.capacity_option}' must be unbounded, got {value!r}"
        raise ConfigurationError(candidate, msg)


def _select(strategies: Sequence[Strategy], only: Sequence[str]) -> list[Strategy]:
    if not only:
        return list(strategies)
    by_name = {s.name: s for s in strategies}
    selected: list[Strategy] = []
    for name in only:
        if name not in by_name:
            raise ConfigurationError(name, "no such strategy")
        selected.append(by_name[name])
    return selected


def register_candidates(
    workload: Workload,
    options: CandidateOptions | None = None,
    strategies: Sequence[Strategy] = STRATEGIES,
    key_adapters: Mapping[str, KeyAdapter] = CUSTOM_KEY_ADAPTERS,
) -> dict[str, Callable[..., Any]]:
    """Wrap *workload.fn* once per strategy, in registration order.

    When ``options.custom_keys`` is set, every selected strategy must have
    a key adapter; one candidate is produced per (strategy, key) pair.
    Raises ConfigurationError naming the candidate on any option mismatch.
    """
    if options is None:
        options = CandidateOptions()

    candidates: dict[str, Callable[..., Any]] = {}

    def _add(name: str, strategy: Strategy, opts: dict[str, Any]) -> None:
        if name in candidates:
            raise ConfigurationError(name, "registered twice")
        _check_options(name, strategy, opts)
        candidates[name] = strategy.wrap(workload.fn, opts)
        logger.debug("Registered %s for %s with %s", name, workload.name, sorted(opts))

    for strategy in _select(strategies, options.only):
        if not options.custom_keys:
            _add(strategy.name, strategy, strategy.make_options())
            continue

        adapter = key_adapters.get(strategy.name)
        if adapter is None:
            raise ConfigurationError(strategy.name, "no custom key option is mapped")
        for label, key_of in options.custom_keys.items():
            opts = strategy.make_options()
            opts[adapter.option] = adapter.convert(key_of, workload.fn)
            _add(f"{strategy.name} ({label} key)", strategy, opts)

    return candidates


def describe_strategies(
    strategies: Sequence[Strategy] = STRATEGIES,
    key_adapters: Mapping[str, KeyAdapter] = CUSTOM_KEY_ADAPTERS,
) -> list[list[str]]:
    """Return ``[name, library, options, key option]`` rows for display."""
    rows: list[list[str]] = []
    for s in strategies:
        opts = ", ".join(f"{k}={v!r}" for k, v in s.make_options().items()) or "-"
        adapter = key_adapters.get(s.name)
        rows.append([s.name, s.library, opts, adapter.option if adapter else "-"])
    return rows
