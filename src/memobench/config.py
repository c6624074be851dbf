"""Path constants and settings loading."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from memobench.errors import SettingsError
from memobench.suites import DEFAULT_SEQUENCE, SUITE_SHAPES
from memobench.workloads.fibonacci import validate_input

# .memobench/ directory structure
MEMOBENCH_DIR = ".memobench"
LOGS_DIR = "logs"
LOG_FILE = "memobench.log"
CONFIG_FILE = "memobench.yaml"

CONSOLE_BACKENDS = ("auto", "rich", "plain")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def logs_dir(project_root: Path) -> Path:
    """Return the logs directory path."""
    return project_root / MEMOBENCH_DIR / LOGS_DIR


def default_log_file(project_root: Path) -> Path:
    return logs_dir(project_root) / LOG_FILE


@dataclass(frozen=True)
class Settings:
    """Run settings, loaded from YAML and overridden from the command line."""

    min_samples: int = 5
    max_time: float = 5.0
    min_sample_time: float = 0.05
    fibonacci_number: int = 25
    suites: tuple[str, ...] = DEFAULT_SEQUENCE
    include_custom_equality: bool = False
    console: str = "auto"
    log_file: str = f"{MEMOBENCH_DIR}/{LOGS_DIR}/{LOG_FILE}"
    log_level: str = "INFO"

    def with_overrides(self, **overrides: Any) -> Settings:
        """Return a validated copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "suites" in changes:
            changes["suites"] = tuple(changes["suites"])
        return validate(dataclasses.replace(self, **changes))


def _check_type(name: str, value: object, expected: type | tuple[type, ...]) -> None:
    if isinstance(value, bool) and expected is not bool:
        raise SettingsError(f"{name} must not be a boolean")
    if not isinstance(value, expected):
        raise SettingsError(f"{name} has the wrong type: {value!r}")


def validate(settings: Settings) -> Settings:
    """Raise SettingsError if any field of *settings* is out of range."""
    _check_type("min_samples", settings.min_samples, int)
    _check_type("max_time", settings.max_time, (int, float))
    _check_type("min_sample_time", settings.min_sample_time, (int, float))
    _check_type("include_custom_equality", settings.include_custom_equality, bool)
    _check_type("console", settings.console, str)
    _check_type("log_file", settings.log_file, str)
    _check_type("log_level", settings.log_level, str)

    if settings.min_samples < 1:
        raise SettingsError("min_samples must be >= 1")
    if settings.max_time <= 0 or settings.min_sample_time <= 0:
        raise SettingsError("max_time and min_sample_time must be positive")
    validate_input(settings.fibonacci_number)
    if not settings.suites:
        raise SettingsError("at least one suite must be selected")
    for name in settings.suites:
        if name not in SUITE_SHAPES:
            raise SettingsError(f"unknown suite '{name}'; choose from {', '.join(SUITE_SHAPES)}")
    if settings.console not in CONSOLE_BACKENDS:
        raise SettingsError(f"console must be one of {', '.join(CONSOLE_BACKENDS)}")
    if settings.log_level.upper() not in LOG_LEVELS:
        raise SettingsError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
    return settings


def load_settings(path: Path | None = None, project_root: Path | None = None) -> Settings:
    """Load settings from *path*, or from ``memobench.yaml`` if it exists.

    Keys missing from the file keep their defaults, except ``log_file``,
    which defaults to ``.memobench/logs/memobench.log`` under *project_root*
    (the working directory when omitted). Unknown keys are an error.
    """
    root = project_root or Path.cwd()
    log_file = str(default_log_file(root))
    if path is None:
        candidate = root / CONFIG_FILE
        if not candidate.exists():
            return Settings(log_file=log_file)
        path = candidate
    elif not path.exists():
        raise SettingsError(f"config file not found: {path}")

    try:
        data: Any = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise SettingsError(f"cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"{path} must contain a mapping")

    known = {f.name for f in dataclasses.fields(Settings)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise SettingsError(f"unknown setting(s) in {path}: {', '.join(unknown)}")

    if "suites" in data:
        suites = data["suites"]
        if not isinstance(suites, list) or not all(isinstance(s, str) for s in suites):
            raise SettingsError("suites must be a list of suite names")
        data["suites"] = tuple(suites)

    data.setdefault("log_file", log_file)
    return validate(Settings(**data))
