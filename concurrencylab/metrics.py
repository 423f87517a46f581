from __future__ import annotations

import math
from typing import Any

from concurrencylab.observation import Observation
from concurrencylab.report import Report
from concurrencylab.validate import RunSettings


def _percentile_sorted(values_sorted: list[float], p: int) -> float:
    if not values_sorted:
        return math.nan
    if p <= 0:
        return float(values_sorted[0])
    if p >= 100:
        return float(values_sorted[-1])

    # Linear interpolation between closest ranks, matching common percentile defs.
    n = len(values_sorted)
    pos = (p / 100.0) * (n - 1)
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    if lo == hi:
        return float(values_sorted[lo])
    frac = pos - lo
    return float(values_sorted[lo] * (1.0 - frac) + values_sorted[hi] * frac)


def _percentiles(values: list[float], ps: list[int]) -> dict[str, float]:
    if not values:
        return {f"p{p}": math.nan for p in ps}
    values_sorted = sorted(float(x) for x in values)
    return {f"p{p}": _percentile_sorted(values_sorted, p) for p in ps}


def summarize_observation(obs: Observation) -> dict[str, Any]:
    return {
        "tasks": obs.count_tasks(),
        "mean_task_duration_ms": obs.mean_task_duration(),
        "std_dev_ms": obs.std_deviation(),
        "total_duration_ms": obs.total_duration(),
        "concurrency_profit": obs.concurrency_profit,
        "task_duration_ms": _percentiles(
            [t.duration_ms for t in obs.tasks], [50, 90, 99]
        ),
    }


def summarize_report(
    report: Report, *, settings: RunSettings | None = None, cpus: int | None = None
) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "observations": [summarize_observation(o) for o in report.observations],
    }
    if report.count_observations():
        summary["task_duration_min_ms"] = report.task_duration_min()
    if cpus is not None:
        summary["cpus"] = cpus
    if settings is not None:
        summary["settings"] = {
            "tasks_max": settings.tasks_max,
            "n_cycles": settings.n_cycles,
            "series_size": settings.series_size,
            "executor": settings.executor,
            "seed": settings.seed,
        }
    return summary
