"""Tests for the streaming build subprocess runner."""

import sys
from pathlib import Path

from tenant_installer.pipeline import run


def _capture(monkeypatch):
    lines = []
    monkeypatch.setattr(run, "ui_plain", lines.append)
    return lines


def test_success_streams_merged_output(monkeypatch, tmp_path):
    lines = _capture(monkeypatch)
    script = "import sys; print('compiling'); print('warn', file=sys.stderr); print('done')"
    assert run.run_build([sys.executable, "-u", "-c", script], tmp_path) is True
    assert lines == ["compiling", "warn", "done"]


def test_non_zero_exit_returns_false(monkeypatch, tmp_path, caplog):
    _capture(monkeypatch)
    assert run.run_build([sys.executable, "-c", "raise SystemExit(2)"], tmp_path) is False
    assert "Return code: 2" in caplog.text


def test_missing_program_returns_false(monkeypatch, tmp_path):
    _capture(monkeypatch)
    assert run.run_build(["definitely-not-a-build-tool-xyz"], tmp_path) is False


def test_runs_in_working_directory(monkeypatch, tmp_path):
    lines = _capture(monkeypatch)
    script = "import os; print(os.getcwd())"
    assert run.run_build([sys.executable, "-c", script], tmp_path)
    assert Path(lines[0]).resolve() == tmp_path.resolve()


def test_undecodable_output_is_replaced(monkeypatch, tmp_path):
    lines = _capture(monkeypatch)
    script = "import sys; sys.stdout.buffer.write(b'\\xff\\xfe bad\\n'); sys.exit(1)"
    assert run.run_build([sys.executable, "-c", script], tmp_path) is False
    assert lines == ["�� bad"]


def test_broken_console_stops_the_build(monkeypatch, tmp_path, caplog):
    def broken(line):
        raise BrokenPipeError("console closed")

    monkeypatch.setattr(run, "ui_plain", broken)
    script = "import time; print('start', flush=True); time.sleep(60)"
    assert run.run_build([sys.executable, "-c", script], tmp_path) is False
    assert "console closed" in caplog.text
