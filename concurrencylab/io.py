from __future__ import annotations

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

from concurrencylab.report import Report

TOTALS_HEADER = [
    "Tasks",
    "Mean task duration",
    "Std. dev.",
    "Total duration",
    "Profit",
]
SCHEDULE_HEADER = ["Tasks", "Task", "Started", "Finished", "Duration"]


def _write_report(f: TextIO, report: Report) -> None:
    w = csv.writer(f, lineterminator="\n")

    w.writerow(TOTALS_HEADER)
    for obs in report.observations:
        w.writerow(
            [
                obs.count_tasks(),
                round(obs.mean_task_duration()),
                round(obs.std_deviation()),
                obs.total_duration(),
                f"{(obs.concurrency_profit or 0.0) * 100.0:f}%",
            ]
        )

    w.writerow([])

    w.writerow(SCHEDULE_HEADER)
    for obs in report.observations:
        n_tasks = obs.count_tasks()
        for task_no, task in enumerate(obs.tasks, start=1):
            w.writerow(
                [n_tasks, task_no, task.start_ms, task.finish_ms, task.duration_ms]
            )


def format_report(report: Report) -> str:
    buf = StringIO()
    _write_report(buf, report)
    return buf.getvalue()


def write_report_csv(path: Path, report: Report) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        _write_report(f, report)


def write_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")
