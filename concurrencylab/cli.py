from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from concurrencylab import render
from concurrencylab.errors import ObservationError
from concurrencylab.executors import EXECUTOR_NAMES
from concurrencylab.io import write_report_csv, write_summary_json
from concurrencylab.measure import measure_concurrency_profit, measure_sysparams
from concurrencylab.metrics import summarize_report
from concurrencylab.report import Report
from concurrencylab.validate import (
    RunSettings,
    SettingsValidationError,
    validate_settings,
)
from concurrencylab.workload import count_cpus

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="concurrencylab",
        description="Measure the profit of running CPU-bound tasks concurrently",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sys_p = sub.add_parser(
        "sysparams", aliases=["s"], help="Display system parameters"
    )
    sys_p.add_argument(
        "--calibration-ms",
        type=int,
        default=1000,
        help="Minimum duration of the cycles-per-second probe",
    )

    prof = sub.add_parser(
        "profit", aliases=["p"], help="Measure profits of concurrency"
    )
    prof.add_argument("tasks_max", type=int, help="Number of tasks")
    prof.add_argument("n_cycles", type=int, help="Cycles in a task")
    prof.add_argument("series_size", type=int, help="Tasks in a series")
    prof.add_argument("out_file", nargs="?", type=Path, help="Output CSV file")
    prof.add_argument("--executor", choices=EXECUTOR_NAMES, default="thread")
    prof.add_argument("--seed", type=int, default=None)
    prof.add_argument("--out-summary", type=Path, default=None)
    return p


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        print(line)


def _run_sysparams(args: argparse.Namespace) -> int:
    params = measure_sysparams(min_duration_ms=args.calibration_ms)
    _print_lines(render.sysparams_table(params))
    return 0


def _run_profit(args: argparse.Namespace) -> int:
    settings = RunSettings(
        tasks_max=args.tasks_max,
        n_cycles=args.n_cycles,
        series_size=args.series_size,
        executor=args.executor,
        seed=args.seed,
    )
    try:
        validate_settings(settings)
    except SettingsValidationError as e:
        sys.stderr.write(f"Invalid arguments: {e}\n")
        return 2

    cpus = count_cpus()

    def _print_entry(report: Report, index: int) -> None:
        n_tasks = index + 1
        print(render.profit_entry(report.observation(index)))
        if render.needs_separator(n_tasks, settings.tasks_max, cpus):
            print(render.PROFIT_SEPARATOR)

    _print_lines(render.profit_header())
    try:
        report = measure_concurrency_profit(settings, on_observation=_print_entry)
    except ObservationError as e:
        logger.error("measurement aborted: %s", e)
        sys.stderr.write(f"Measurement failed: {e}\n")
        return 3
    _print_lines(render.profit_footer())

    if args.out_file:
        write_report_csv(args.out_file, report)
    if args.out_summary:
        write_summary_json(
            args.out_summary, summarize_report(report, settings=settings, cpus=cpus)
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(render.salutation())

    if args.cmd in ("sysparams", "s"):
        return _run_sysparams(args)
    if args.cmd in ("profit", "p"):
        return _run_profit(args)

    raise AssertionError(f"Unhandled command: {args.cmd}")
