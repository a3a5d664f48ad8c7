"""Smoke tests for the breakout-fixtures module entrypoint."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest


def _run(*args: str, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "breakout_fixtures", *args],
        check=False,
        capture_output=True,
        text=True,
        cwd=cwd,
    )


def test_help_returns_zero(tmp_path: Path) -> None:
    result = _run("--help", cwd=tmp_path)
    assert result.returncode == 0
    assert "Usage:" in result.stdout


def test_generate_help_returns_zero(tmp_path: Path) -> None:
    result = _run("generate", "--help", cwd=tmp_path)
    assert result.returncode == 0
    assert "--output-root" in result.stdout


@pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")
def test_module_entrypoint_streams_json_logs(tmp_path: Path) -> None:
    result = _run(
        "--log-file",
        str(tmp_path / "run.log"),
        "generate",
        "--output-root",
        str(tmp_path / "fx"),
        cwd=tmp_path,
    )
    assert result.returncode == 0, result.stderr
    records = [json.loads(line) for line in result.stderr.splitlines() if line.startswith("{")]
    assert records
    assert all(record["level"] for record in records)
    assert "nested-breakout" in {record.get("scenario") for record in records}


@pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")
def test_module_entrypoint_json_logs_can_be_disabled(tmp_path: Path) -> None:
    result = _run(
        "--log-file",
        str(tmp_path / "run.log"),
        "--no-json-logs",
        "generate",
        "--output-root",
        str(tmp_path / "fx"),
        cwd=tmp_path,
    )
    assert result.returncode == 0
    assert '"level"' not in result.stderr
