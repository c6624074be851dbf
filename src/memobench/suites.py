"""Built-in suite definitions and the default run sequence."""

from __future__ import annotations

import dataclasses
import operator
from collections.abc import Sequence

from memobench.domain.models import CandidateOptions, KeyFunction, Shape, SuiteDefinition
from memobench.errors import SettingsError
from memobench.workloads.fibonacci import WORKLOADS, validate_input

# Label -> key function for the custom-equality suite
CUSTOM_KEYS: dict[str, KeyFunction] = {
    "dataclasses.astuple": dataclasses.astuple,
    "operator.attrgetter": operator.attrgetter("number"),
}

CUSTOM_KEY_STRATEGIES = ("cachetools", "toolz", "memoization")

SUITE_SHAPES: dict[str, Shape] = {shape.value: shape for shape in Shape}

DEFAULT_SEQUENCE: tuple[str, ...] = (
    Shape.SINGLE_PRIMITIVE.value,
    Shape.SINGLE_STRUCTURED.value,
    Shape.MULTI_PRIMITIVE.value,
    Shape.MULTI_STRUCTURED.value,
)

# Defined but only run when explicitly requested
OPT_IN_SUITES: tuple[str, ...] = (Shape.CUSTOM_EQUALITY.value,)


def make_suite(name: str, number: int) -> SuiteDefinition:
    """Build the suite called *name* with input depth *number*."""
    if name not in SUITE_SHAPES:
        msg = f"unknown suite '{name}'; choose from {', '.join(SUITE_SHAPES)}"
        raise SettingsError(msg)
    shape = SUITE_SHAPES[name]
    options = CandidateOptions()
    if shape is Shape.CUSTOM_EQUALITY:
        options = CandidateOptions(custom_keys=CUSTOM_KEYS, only=CUSTOM_KEY_STRATEGIES)
    return SuiteDefinition(
        name=name,
        workload=WORKLOADS[shape],
        number=validate_input(number),
        options=options,
    )


def build_sequence(
    names: Sequence[str] = DEFAULT_SEQUENCE,
    number: int = 25,
    include_custom_equality: bool = False,
) -> list[SuiteDefinition]:
    """Return suites in declaration order, optionally followed by the opt-in ones."""
    ordered = list(names)
    if include_custom_equality:
        ordered.extend(n for n in OPT_IN_SUITES if n not in ordered)
    return [make_suite(name, number) for name in ordered]
