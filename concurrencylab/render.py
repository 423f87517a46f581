from __future__ import annotations

from concurrencylab.observation import Observation
from concurrencylab.types import SysParams

PROFIT_RULE = "=" * 60
PROFIT_SEPARATOR = "-" * 60
SYSPARAMS_RULE = "=" * 36


def salutation() -> str:
    return "Testing concurrent code execution in Python\n"


def profit_header() -> list[str]:
    return [
        PROFIT_RULE,
        "Tasks  Mean task duration  Std. dev.  Total duration  Profit",
        PROFIT_RULE,
    ]


def profit_entry(obs: Observation) -> str:
    profit = obs.concurrency_profit or 0.0
    return (
        f"{obs.count_tasks():5d} "
        f"{round(obs.mean_task_duration()):19d} "
        f"{round(obs.std_deviation()):10d} "
        f"{obs.total_duration():15d} "
        f"{profit * 100.0:6.0f}%"
    )


def needs_separator(n_tasks: int, tasks_max: int, cpus: int) -> bool:
    return n_tasks % cpus == 0 and n_tasks != tasks_max


def profit_footer() -> list[str]:
    return [PROFIT_RULE]


def profit_table(observations: list[Observation], *, cpus: int) -> list[str]:
    lines = profit_header()
    tasks_max = len(observations)
    for n_tasks, obs in enumerate(observations, start=1):
        lines.append(profit_entry(obs))
        if needs_separator(n_tasks, tasks_max, cpus):
            lines.append(PROFIT_SEPARATOR)
    lines.extend(profit_footer())
    return lines


def sysparams_table(params: SysParams) -> list[str]:
    return [
        SYSPARAMS_RULE,
        "System parameter               Value",
        SYSPARAMS_RULE,
        f"CPUs available {params.cpus:21d}",
        f"Cycles per second {params.cycles_per_sec:18d}",
        SYSPARAMS_RULE,
    ]
