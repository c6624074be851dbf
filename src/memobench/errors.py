"""Exception hierarchy for memobench."""

from __future__ import annotations


class BenchmarkError(Exception):
    """Base class for every failure that aborts a benchmark run."""


class SettingsError(BenchmarkError):
    """Raised when the YAML settings or CLI overrides are invalid."""


class ConfigurationError(BenchmarkError):
    """Raised when a candidate's library options don't match the registry."""

    def __init__(self, candidate: str, message: str) -> None:
        self.candidate = candidate
        super().__init__(f"candidate '{candidate}': {message}")


class MeasurementError(BenchmarkError):
    """Raised when a candidate fails during a timed invocation."""

    def __init__(self, candidate: str, suite: str, message: str) -> None:
        self.candidate = candidate
        self.suite = suite
        super().__init__(f"suite '{suite}', candidate '{candidate}': {message}")
