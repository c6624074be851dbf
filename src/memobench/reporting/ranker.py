"""Ranking and row formatting for trial results."""

from __future__ import annotations

from collections.abc import Iterable

from memobench.domain.models import TrialResult

HEADERS = ["Name", "Ops / sec", "Relative margin of error", "Sample size"]


def rank(results: Iterable[TrialResult]) -> list[TrialResult]:
    """Return results ordered by ops/sec, fastest first.

    ``sorted`` is stable, so exact ties keep measurement order.
    """
    return sorted(results, key=lambda r: r.ops_per_second, reverse=True)


def format_row(result: TrialResult) -> list[str]:
    return [
        result.name,
        f"{result.ops_per_second:,.0f}",
        f"± {result.relative_margin_of_error:.2f}%",
        str(result.sample_size),
    ]
