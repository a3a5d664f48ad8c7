"""CLI tests for generate, scenarios and inspect commands."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner, Result

from breakout_fixtures.cli import app

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")


def _invoke(tmp_path: Path, *args: str) -> Result:
    runner = CliRunner()
    return runner.invoke(app, ["--log-file", str(tmp_path / "run.log"), *args])


def test_generate_creates_catalog_and_exits_zero(tmp_path: Path) -> None:
    root = tmp_path / "fx"
    result = _invoke(tmp_path, "generate", "--output-root", str(root))
    assert result.exit_code == 0, result.stdout
    assert os.readlink(root / "immediate-breakout" / "breakout") == ".."
    assert "Created escape link" in (tmp_path / "run.log").read_text(encoding="utf-8")


def test_generate_rerun_fails_with_already_exists(tmp_path: Path) -> None:
    root = tmp_path / "fx"
    assert _invoke(tmp_path, "generate", "--output-root", str(root)).exit_code == 0
    result = _invoke(tmp_path, "generate", "--output-root", str(root))
    assert result.exit_code == 1
    assert "Failed scenarios: nested-breakout, immediate-breakout, alias-to-nested" in result.stdout


def test_generate_uses_environment_output_root(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("BREAKOUT_FIXTURES_ROOT", str(tmp_path / "env-root"))
    result = _invoke(tmp_path, "generate")
    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "env-root" / "nested-breakout" / ".git").is_dir()


def test_generate_rejects_unknown_marker(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "generate", "--output-root", str(tmp_path / "fx"), "--marker", "hg")
    assert result.exit_code != 0
    assert not (tmp_path / "fx").exists()


def test_generate_writes_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / "manifest.json"
    result = _invoke(
        tmp_path,
        "generate",
        "--output-root",
        str(tmp_path / "fx"),
        "--manifest",
        str(manifest),
    )
    assert result.exit_code == 0, result.stdout
    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert data["report"]["ok"] is True


def test_scenarios_lists_catalog(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "scenarios")
    assert result.exit_code == 0
    assert "Scenario Catalog" in result.stdout


def test_inspect_reports_escaping_links(tmp_path: Path) -> None:
    root = tmp_path / "fx"
    _invoke(tmp_path, "generate", "--output-root", str(root))
    result = _invoke(tmp_path, "inspect", str(root), "--json")
    assert result.exit_code == 0, result.stdout
    rows = {row["path"]: row for row in json.loads(result.stdout)}
    assert rows["nested-breakout/hide/breakout"]["escapes"] is True
    assert rows["alias-to-nested"]["escapes"] is None


def test_inspect_fails_for_contained_link(tmp_path: Path) -> None:
    scenario = tmp_path / "fx" / "tame"
    scenario.mkdir(parents=True)
    (scenario / "self").symlink_to(".")
    result = _invoke(tmp_path, "inspect", str(tmp_path / "fx"))
    assert result.exit_code == 1


def test_version_returns_zero() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip()
