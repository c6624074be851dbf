"""Caching strategies under test and their custom-key option adapters.

Each library names its options differently. This module is the single
hand-maintained table that maps the normalized concepts ("unbounded
capacity", "custom key") to each library's own option names.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Any

import cachetools
import cachetools.func
import memoization
import toolz.functoolz

from memobench.domain.models import KeyFunction


@dataclass(frozen=True)
class Strategy:
    """One memoization library and how to apply it to a function."""

    name: str
    library: str
    entry: Callable[..., Any]
    make_options: Callable[[], dict[str, Any]] = dict
    curried: bool = True
    capacity_option: str | None = None

    def wrap(self, fn: Callable[..., Any], options: Mapping[str, Any]) -> Callable[..., Any]:
        """Apply the library to *fn* with *options*."""
        if self.curried:
            return self.entry(**options)(fn)
        return self.entry(fn, **options)


@dataclass(frozen=True)
class KeyAdapter:
    """Threads a normalized key function into a library's own option."""

    option: str
    convert: Callable[[KeyFunction, Callable[..., Any]], Callable[..., Hashable]]


def _compose_key(key_of: KeyFunction, args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Hashable:
    key = tuple(key_of(a) for a in args)
    if kwargs:
        return key, tuple(sorted((k, key_of(v)) for k, v in kwargs.items()))
    return key


def star_args_key(key_of: KeyFunction, fn: Callable[..., Any]) -> Callable[..., Hashable]:
    """Key callable invoked as ``key(*args, **kwargs)``."""

    def key(*args: Any, **kwargs: Any) -> Hashable:
        return _compose_key(key_of, args, kwargs)

    return key


def args_kwargs_key(key_of: KeyFunction, fn: Callable[..., Any]) -> Callable[..., Hashable]:
    """Key callable invoked as ``key(args, kwargs)``."""

    def key(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Hashable:
        return _compose_key(key_of, args, kwargs)

    return key


def signature_key(key_of: KeyFunction, fn: Callable[..., Any]) -> Callable[..., Hashable]:
    """Key callable that advertises the same signature as *fn*."""
    key = star_args_key(key_of, fn)
    key.__signature__ = inspect.signature(fn)  # type: ignore[attr-defined]
    return key


# ---------------------------------------------------------------------------
# Registry tables
# ---------------------------------------------------------------------------

STRATEGIES: tuple[Strategy, ...] = (
    Strategy(
        name="functools.lru_cache",
        library="functools",
        entry=functools.lru_cache,
        make_options=lambda: {"maxsize": None},
        capacity_option="maxsize",
    ),
    Strategy(
        name="functools.cache",
        library="functools",
        entry=functools.cache,
        curried=False,
    ),
    Strategy(
        name="cachetools",
        library="cachetools",
        entry=cachetools.cached,
        make_options=lambda: {"cache": {}},
        capacity_option="cache",
    ),
    Strategy(
        name="cachetools.func",
        library="cachetools",
        entry=cachetools.func.lru_cache,
        make_options=lambda: {"maxsize": None},
        capacity_option="maxsize",
    ),
    Strategy(
        name="toolz",
        library="toolz",
        entry=toolz.functoolz.memoize,
        make_options=lambda: {"cache": {}},
        curried=False,
        capacity_option="cache",
    ),
    Strategy(
        name="memoization",
        library="memoization",
        entry=memoization.cached,
        make_options=lambda: {"max_size": None},
        capacity_option="max_size",
    ),
)

CUSTOM_KEY_ADAPTERS: dict[str, KeyAdapter] = {
    "cachetools": KeyAdapter(option="key", convert=star_args_key),
    "toolz": KeyAdapter(option="key", convert=args_kwargs_key),
    "memoization": KeyAdapter(option="custom_key_maker", convert=signature_key),
}
