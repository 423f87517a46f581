from __future__ import annotations

from dataclasses import dataclass

from concurrencylab.executors import EXECUTOR_NAMES


class SettingsValidationError(ValueError):
    pass


@dataclass(frozen=True)
class RunSettings:
    tasks_max: int
    n_cycles: int
    series_size: int
    executor: str = "thread"
    seed: int | None = None


def validate_settings(settings: RunSettings) -> None:
    if settings.tasks_max < 1:
        raise SettingsValidationError(
            f"tasks_max must be >= 1 (got {settings.tasks_max})"
        )
    if settings.n_cycles < 1:
        raise SettingsValidationError(
            f"n_cycles must be >= 1 (got {settings.n_cycles})"
        )
    if settings.series_size < 1:
        raise SettingsValidationError(
            f"series_size must be >= 1 (got {settings.series_size})"
        )
    if settings.series_size > settings.tasks_max:
        raise SettingsValidationError(
            (
                f"series_size must not exceed tasks_max "
                f"(got {settings.series_size} > {settings.tasks_max})"
            )
        )
    if settings.executor not in EXECUTOR_NAMES:
        raise SettingsValidationError(
            f"executor must be one of {', '.join(EXECUTOR_NAMES)} "
            f"(got {settings.executor!r})"
        )
