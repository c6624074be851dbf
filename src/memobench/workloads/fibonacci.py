"""Fibonacci workloads in several calling-convention shapes.

Each function recurses through its own undecorated name. Only the
top-level call goes through a candidate's wrapper, so an uncached call is
exponential and a cache hit is a single lookup.
"""

from __future__ import annotations

from memobench.domain.models import (
    Completion,
    FibonacciInput,
    NumberBox,
    Shape,
    Workload,
)
from memobench.errors import SettingsError

MAX_FIBONACCI_NUMBER = 35


def fibonacci(number: int) -> int:
    return number if number < 2 else fibonacci(number - 1) + fibonacci(number - 2)


def fibonacci_single_object(value: FibonacciInput) -> int:
    number = value.number
    if number < 2:
        return number
    return fibonacci_single_object(FibonacciInput(number - 1)) + fibonacci_single_object(
        FibonacciInput(number - 2)
    )


def fibonacci_multiple_primitive(number: int, is_complete: bool) -> int:
    if is_complete:
        return number

    first = number - 1
    second = number - 2
    return fibonacci_multiple_primitive(first, first < 2) + fibonacci_multiple_primitive(
        second, second < 2
    )


def fibonacci_multiple_object(number: int, check: Completion) -> int:
    if check.is_complete:
        return number

    first = number - 1
    second = number - 2
    return fibonacci_multiple_object(first, Completion(first < 2)) + fibonacci_multiple_object(
        second, Completion(second < 2)
    )


def fibonacci_deep_equal(box: NumberBox) -> int:
    number = box.number
    if number < 2:
        return number
    return fibonacci_deep_equal(NumberBox(number - 1)) + fibonacci_deep_equal(NumberBox(number - 2))


def validate_input(number: object) -> int:
    """Return *number* if it is a safe Fibonacci index, else raise SettingsError."""
    if isinstance(number, bool) or not isinstance(number, int):
        msg = f"fibonacci number must be an integer, got {number!r}"
        raise SettingsError(msg)
    if not 0 <= number <= MAX_FIBONACCI_NUMBER:
        msg = f"fibonacci number must be between 0 and {MAX_FIBONACCI_NUMBER}, got {number}"
        raise SettingsError(msg)
    return number


# ---------------------------------------------------------------------------
# Workload table
# ---------------------------------------------------------------------------

SINGLE_PRIMITIVE = Workload(
    name="fibonacci",
    shape=Shape.SINGLE_PRIMITIVE,
    fn=fibonacci,
    description="functions with a single primitive parameter",
    make_args=lambda n: (n,),
)

SINGLE_STRUCTURED = Workload(
    name="fibonacci_single_object",
    shape=Shape.SINGLE_STRUCTURED,
    fn=fibonacci_single_object,
    description="functions with a single object parameter",
    make_args=lambda n: (FibonacciInput(n),),
)

MULTI_PRIMITIVE = Workload(
    name="fibonacci_multiple_primitive",
    shape=Shape.MULTI_PRIMITIVE,
    fn=fibonacci_multiple_primitive,
    description="functions with multiple parameters that contain only primitives",
    make_args=lambda n: (n, n < 2),
)

MULTI_STRUCTURED = Workload(
    name="fibonacci_multiple_object",
    shape=Shape.MULTI_STRUCTURED,
    fn=fibonacci_multiple_object,
    description="functions with multiple parameters that contain objects",
    make_args=lambda n: (n, Completion(n < 2)),
)

CUSTOM_EQUALITY = Workload(
    name="fibonacci_deep_equal",
    shape=Shape.CUSTOM_EQUALITY,
    fn=fibonacci_deep_equal,
    description="alternative cache key types",
    make_args=lambda n: (NumberBox(n),),
)

WORKLOADS: dict[Shape, Workload] = {
    w.shape: w
    for w in (SINGLE_PRIMITIVE, SINGLE_STRUCTURED, MULTI_PRIMITIVE, MULTI_STRUCTURED, CUSTOM_EQUALITY)
}
