"""Tests for fixture-context logging."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from breakout_fixtures.fixtures.catalog import generate_fixtures
from breakout_fixtures.logging_utils import (
    FixtureContextFormatter,
    JsonLogFormatter,
    configure_logging,
    fixture_context,
)


@pytest.fixture(autouse=True)
def _detach_package_handlers() -> Iterator[None]:
    yield
    logger = logging.getLogger("breakout_fixtures")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("breakout_fixtures", logging.ERROR, __file__, 1, "boom", None, None)
    for name, value in extra.items():
        setattr(record, name, value)
    return record


def test_json_formatter_includes_fixture_context() -> None:
    record = _record(**fixture_context("nested-breakout", "add_escape_link", Path("/fx/a")))
    payload = json.loads(JsonLogFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert payload["scenario"] == "nested-breakout"
    assert payload["operation"] == "add_escape_link"
    assert payload["path"] == "/fx/a"


def test_formatters_omit_missing_context() -> None:
    record = _record(**fixture_context("case"))
    payload = json.loads(JsonLogFormatter().format(record))
    assert "operation" not in payload
    assert FixtureContextFormatter().format(record).endswith("boom [scenario=case]")
    assert "[" not in FixtureContextFormatter().format(_record())


@pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")
def test_generation_log_records_scenario_context_per_run(tmp_path: Path) -> None:
    log_path = tmp_path / "run.log"

    configure_logging(log_file=log_path, verbose=False)
    generate_fixtures(tmp_path / "first")
    configure_logging(log_file=log_path, verbose=False)
    generate_fixtures(tmp_path / "first")

    content = log_path.read_text(encoding="utf-8")
    assert "Created escape link" not in content
    assert "Scenario failed" in content
    assert "scenario=nested-breakout operation=init_scenario" in content


@pytest.mark.skipif(sys.platform == "win32", reason="requires POSIX symlinks")
def test_json_stream_writes_context_to_stderr(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging(log_file=tmp_path / "run.log", verbose=True, json_stream=True)
    generate_fixtures(tmp_path / "fx")

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
    escape = [line for line in lines if line.get("operation") == "add_escape_link"]
    assert {line["scenario"] for line in escape} == {"nested-breakout", "immediate-breakout"}
    assert all(line["logger"] == "breakout_fixtures" for line in lines)


def test_configure_without_json_stream_keeps_stderr_quiet(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    configure_logging(log_file=tmp_path / "run.log", verbose=False, json_stream=True)
    logger = configure_logging(log_file=tmp_path / "run.log", verbose=False)
    logger.info("file only")
    assert capsys.readouterr().err == ""
    assert "file only" in (tmp_path / "run.log").read_text(encoding="utf-8")
