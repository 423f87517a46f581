from __future__ import annotations

import json
import runpy
import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

from concurrencylab.observation import Observation
from concurrencylab.report import Report
from concurrencylab.types import SysParams, TaskRecord


def _sample_report() -> Report:
    report = Report()
    report.register_observation(
        Observation([TaskRecord(start_ms=1000, duration_ms=200)])
    )
    report.register_observation(
        Observation(
            [
                TaskRecord(start_ms=1000, duration_ms=300),
                TaskRecord(start_ms=1050, duration_ms=280),
            ]
        )
    )
    return report


def test_format_report_sections() -> None:
    from concurrencylab.io import format_report

    lines = format_report(_sample_report()).splitlines()
    assert lines == [
        "Tasks,Mean task duration,Std. dev.,Total duration,Profit",
        "1,200,0,200,0.000000%",
        "2,290,10,330,17.500000%",
        "",
        "Tasks,Task,Started,Finished,Duration",
        "1,1,0,200,200",
        "2,1,0,300,300",
        "2,2,50,330,280",
    ]


def test_io_writers(tmp_path: Path) -> None:
    from concurrencylab.io import format_report, write_report_csv, write_summary_json
    from concurrencylab.metrics import summarize_report

    report = _sample_report()
    out_csv = tmp_path / "out" / "report.csv"
    write_report_csv(out_csv, report)
    assert out_csv.read_text(encoding="utf-8") == format_report(report)

    out_summary = tmp_path / "out" / "summary.json"
    write_summary_json(out_summary, summarize_report(report, cpus=4))
    summary = json.loads(out_summary.read_text(encoding="utf-8"))
    assert summary["cpus"] == 4
    assert summary["task_duration_min_ms"] == 200
    assert summary["observations"][1]["total_duration_ms"] == 330
    assert summary["observations"][1]["task_duration_ms"]["p50"] == 290.0


def test_render_profit_table_separators() -> None:
    from concurrencylab import render

    report = Report()
    report.register_observation(Observation([TaskRecord(0, 100)]))
    for n in range(2, 5):
        report.register_observation(
            Observation([TaskRecord(0, 100) for _ in range(n)])
        )

    lines = render.profit_table(list(report.observations), cpus=2)
    assert lines[1].startswith("Tasks  Mean task duration")
    # separator after 2 tasks, none after the final row
    assert lines.count(render.PROFIT_SEPARATOR) == 1
    assert lines[5] == render.PROFIT_SEPARATOR
    assert lines[4] == "    2                 100          0             100     50%"
    assert lines[-1] == render.PROFIT_RULE


def test_render_sysparams_table() -> None:
    from concurrencylab import render

    lines = render.sysparams_table(SysParams(cpus=8, cycles_per_sec=12345))
    assert lines[3] == "CPUs available                     8"
    assert lines[4] == "Cycles per second              12345"


def test_cli_profit_prints_table_and_writes_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    from concurrencylab.cli import main

    out_csv = tmp_path / "report.csv"
    out_summary = tmp_path / "summary.json"
    rc = main(
        [
            "profit",
            "2",
            "200000",
            "2",
            str(out_csv),
            "--seed",
            "1",
            "--out-summary",
            str(out_summary),
        ]
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert "Tasks  Mean task duration" in out
    assert out_csv.exists()
    summary = json.loads(out_summary.read_text(encoding="utf-8"))
    assert summary["settings"]["tasks_max"] == 2
    assert len(summary["observations"]) == 2


def test_cli_invalid_settings_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    from concurrencylab.cli import main

    assert main(["p", "2", "10", "3"]) == 2
    assert "Invalid arguments" in capsys.readouterr().err


def test_cli_core_error_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    import concurrencylab.cli
    from concurrencylab.errors import ZeroSerialDurationError

    def _fail(*_args: object, **_kwargs: object) -> Report:
        raise ZeroSerialDurationError("serial duration is 0")

    monkeypatch.setattr(concurrencylab.cli, "measure_concurrency_profit", _fail)
    assert concurrencylab.cli.main(["p", "2", "10", "2"]) == 3
    assert "Measurement failed" in capsys.readouterr().err


def test_cli_sysparams(capsys: pytest.CaptureFixture[str]) -> None:
    from concurrencylab.cli import main

    assert main(["s", "--calibration-ms", "5"]) == 0
    assert "Cycles per second" in capsys.readouterr().out


def test_cli_unhandled_command_raises_assertion(monkeypatch: pytest.MonkeyPatch) -> None:
    import concurrencylab.cli

    class _DummyParser:
        def parse_args(self, _argv: list[str] | None) -> object:
            return SimpleNamespace(cmd="nope", log_level="WARNING")

    monkeypatch.setattr(concurrencylab.cli, "_build_parser", lambda: _DummyParser())
    with pytest.raises(AssertionError, match="Unhandled command"):
        concurrencylab.cli.main(["anything"])


def test_python_m_concurrencylab_executes_main(tmp_path: Path) -> None:
    out_csv = tmp_path / "report.csv"
    proc = subprocess.run(
        [sys.executable, "-m", "concurrencylab", "p", "2", "200000", "2", str(out_csv)],
        capture_output=True,
        text=True,
        check=False,
        cwd=Path(__file__).resolve().parents[1],
    )
    assert proc.returncode == 0, proc.stderr
    assert out_csv.exists()


def test___main___module_runs_inprocess_and_exits_zero(tmp_path: Path) -> None:
    out_csv = tmp_path / "report.csv"
    old_argv = sys.argv[:]
    try:
        sys.argv = ["python -m concurrencylab", "p", "1", "1000", "1", str(out_csv)]
        with pytest.raises(SystemExit) as exc:
            runpy.run_module("concurrencylab.__main__", run_name="__main__")
        assert exc.value.code == 0
    finally:
        sys.argv = old_argv

    assert out_csv.exists()
