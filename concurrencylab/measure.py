from __future__ import annotations

# Measurement entrypoints: a profit run over 1..tasks_max tasks, and the
# system parameter probe.

from collections.abc import Callable

from concurrencylab.executors import BatchDispatcher, dispatcher_for_name, observe
from concurrencylab.report import Report
from concurrencylab.types import SysParams
from concurrencylab.validate import RunSettings, validate_settings
from concurrencylab.workload import count_cpus, count_cycles_per_sec

ObservationCallback = Callable[[Report, int], None]


def measure_concurrency_profit(
    settings: RunSettings,
    *,
    dispatcher: BatchDispatcher | None = None,
    on_observation: ObservationCallback | None = None,
) -> Report:
    validate_settings(settings)
    if dispatcher is None:
        dispatcher = dispatcher_for_name(settings.executor, seed=settings.seed)

    report = Report()
    for n_tasks in range(1, settings.tasks_max + 1):
        obs = observe(
            n_tasks=n_tasks,
            n_cycles=settings.n_cycles,
            series_size=settings.series_size,
            dispatcher=dispatcher,
        )
        index = report.register_observation(obs)
        if on_observation is not None:
            on_observation(report, index)

    return report


def measure_sysparams(*, min_duration_ms: int = 1000) -> SysParams:
    return SysParams(
        cpus=count_cpus(),
        cycles_per_sec=count_cycles_per_sec(min_duration_ms=min_duration_ms),
    )
