"""Tests for the candidate registry and its option adapter table."""

from __future__ import annotations

import dataclasses
import functools
import inspect

import pytest

from memobench.candidates.registry import describe_strategies, register_candidates
from memobench.candidates.strategies import (
    CUSTOM_KEY_ADAPTERS,
    STRATEGIES,
    KeyAdapter,
    Strategy,
    args_kwargs_key,
    signature_key,
    star_args_key,
)
from memobench.domain.models import CandidateOptions, NumberBox, Shape
from memobench.errors import ConfigurationError
from memobench.suites import CUSTOM_KEY_STRATEGIES, CUSTOM_KEYS
from memobench.workloads.fibonacci import WORKLOADS, fibonacci, fibonacci_deep_equal

CUSTOM_OPTIONS = CandidateOptions(custom_keys=CUSTOM_KEYS, only=CUSTOM_KEY_STRATEGIES)


class TestRegisterDefaults:
    @pytest.mark.parametrize(
        "shape",
        [Shape.SINGLE_PRIMITIVE, Shape.SINGLE_STRUCTURED, Shape.MULTI_PRIMITIVE, Shape.MULTI_STRUCTURED],
    )
    def test_one_candidate_per_strategy(self, shape: Shape) -> None:
        candidates = register_candidates(WORKLOADS[shape])
        assert list(candidates) == [s.name for s in STRATEGIES]

    @pytest.mark.parametrize(
        "shape",
        [Shape.SINGLE_PRIMITIVE, Shape.SINGLE_STRUCTURED, Shape.MULTI_PRIMITIVE, Shape.MULTI_STRUCTURED],
    )
    def test_repeated_calls_return_identical_results(self, shape: Shape) -> None:
        workload = WORKLOADS[shape]
        args = workload.make_args(15)
        for name, wrapped in register_candidates(workload).items():
            first = wrapped(*args)
            second = wrapped(*args)
            assert first == second == 610, name

    def test_wrappers_are_distinct(self) -> None:
        candidates = register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE])
        assert len({id(fn) for fn in candidates.values()}) == len(candidates)

    def test_second_call_is_a_cache_hit(self) -> None:
        candidates = register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE])
        lru = candidates["functools.lru_cache"]
        lru(12)
        lru(12)
        info = lru.cache_info()  # type: ignore[attr-defined]
        assert (info.hits, info.misses, info.maxsize) == (1, 1, None)

    def test_registrations_do_not_share_caches(self) -> None:
        first = register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE])["functools.lru_cache"]
        second = register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE])["functools.lru_cache"]
        first(10)
        assert second.cache_info().currsize == 0  # type: ignore[attr-defined]

    def test_fresh_cache_options_per_wrap(self) -> None:
        for strategy in STRATEGIES:
            a, b = strategy.make_options(), strategy.make_options()
            if "cache" in a:
                assert a["cache"] is not b["cache"]

    def test_only_selects_in_requested_order(self) -> None:
        options = CandidateOptions(only=("toolz", "functools.cache"))
        candidates = register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE], options)
        assert list(candidates) == ["toolz", "functools.cache"]

    def test_unknown_strategy_in_only(self) -> None:
        options = CandidateOptions(only=("nope",))
        with pytest.raises(ConfigurationError, match="nope"):
            register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE], options)


class TestCustomKeys:
    def test_one_candidate_per_strategy_and_key(self) -> None:
        candidates = register_candidates(WORKLOADS[Shape.CUSTOM_EQUALITY], CUSTOM_OPTIONS)
        assert len(candidates) == len(CUSTOM_KEY_STRATEGIES) * len(CUSTOM_KEYS)
        assert list(candidates)[0] == f"cachetools ({next(iter(CUSTOM_KEYS))} key)"

    def test_key_function_makes_unhashable_args_cacheable(self) -> None:
        calls: list[int] = []

        def counting(box: NumberBox) -> int:
            calls.append(box.number)
            return fibonacci_deep_equal(box)

        workload = dataclasses.replace(WORKLOADS[Shape.CUSTOM_EQUALITY], fn=counting)
        for name, wrapped in register_candidates(workload, CUSTOM_OPTIONS).items():
            calls.clear()
            assert wrapped(NumberBox(14)) == 377, name
            # A distinct but equal box is served from the cache
            assert wrapped(NumberBox(14)) == 377, name
            assert calls == [14], name

    def test_misspelled_key_option_fails_fast(self) -> None:
        adapters = {**CUSTOM_KEY_ADAPTERS, "cachetools": KeyAdapter(option="kye", convert=star_args_key)}
        with pytest.raises(ConfigurationError, match="kye") as excinfo:
            register_candidates(WORKLOADS[Shape.CUSTOM_EQUALITY], CUSTOM_OPTIONS, key_adapters=adapters)
        assert excinfo.value.candidate.startswith("cachetools (")

    def test_strategy_without_key_adapter(self) -> None:
        options = CandidateOptions(custom_keys=CUSTOM_KEYS, only=("functools.lru_cache",))
        with pytest.raises(ConfigurationError, match="no custom key option"):
            register_candidates(WORKLOADS[Shape.CUSTOM_EQUALITY], options)

    def test_adapters_compose_the_same_key(self) -> None:
        key_of = dataclasses.astuple
        args = (NumberBox(3),)
        expected = star_args_key(key_of, fibonacci)(*args)
        assert args_kwargs_key(key_of, fibonacci)(args, {}) == expected
        assert signature_key(key_of, fibonacci)(*args) == expected

    def test_keyword_arguments_are_part_of_the_key(self) -> None:
        key = star_args_key(lambda v: v, fibonacci)
        assert key(1, flag=True) != key(1, flag=False)

    def test_signature_key_mirrors_workload(self) -> None:
        key = signature_key(dataclasses.astuple, WORKLOADS[Shape.CUSTOM_EQUALITY].fn)
        assert inspect.signature(key) == inspect.signature(WORKLOADS[Shape.CUSTOM_EQUALITY].fn)


class TestCapacity:
    def test_bounded_capacity_is_rejected(self) -> None:
        bounded = Strategy(
            name="bounded",
            library="functools",
            entry=functools.lru_cache,
            make_options=lambda: {"maxsize": 128},
            capacity_option="maxsize",
        )
        with pytest.raises(ConfigurationError, match="must be unbounded"):
            register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE], strategies=[bounded])

    def test_missing_capacity_option(self) -> None:
        unset = Strategy(
            name="unset",
            library="functools",
            entry=functools.lru_cache,
            capacity_option="maxsize",
        )
        with pytest.raises(ConfigurationError, match="is not set"):
            register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE], strategies=[unset])

    def test_renamed_library_option(self) -> None:
        renamed = Strategy(
            name="renamed",
            library="functools",
            entry=functools.lru_cache,
            make_options=lambda: {"max_size": None},
            capacity_option="max_size",
        )
        with pytest.raises(ConfigurationError, match="does not accept option"):
            register_candidates(WORKLOADS[Shape.SINGLE_PRIMITIVE], strategies=[renamed])

    def test_duplicate_names(self) -> None:
        with pytest.raises(ConfigurationError, match="registered twice"):
            register_candidates(
                WORKLOADS[Shape.SINGLE_PRIMITIVE], strategies=[STRATEGIES[0], STRATEGIES[0]]
            )


def test_describe_strategies() -> None:
    rows = describe_strategies()
    assert [r[0] for r in rows] == [s.name for s in STRATEGIES]
    by_name = {r[0]: r for r in rows}
    assert by_name["functools.lru_cache"][2] == "maxsize=None"
    assert by_name["functools.cache"][2:] == ["-", "-"]
    assert by_name["memoization"][3] == "custom_key_maker"
