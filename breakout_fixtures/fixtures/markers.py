"""Root markers that flag a scenario directory as a repository-like boundary."""

from __future__ import annotations

import shutil
import subprocess  # nosec B404
from pathlib import Path

from breakout_fixtures.fixtures.errors import FixtureIOError

MARKER_DIR = ".git"
MARKER_KINDS = frozenset({"static", "git"})

_STATIC_FILES = {
    "HEAD": "ref: refs/heads/main\n",
    "config": (
        "[core]\n"
        "\trepositoryformatversion = 0\n"
        "\tfilemode = true\n"
        "\tbare = false\n"
    ),
}
_STATIC_DIRS = ("objects/info", "objects/pack", "refs/heads", "refs/tags")


def write_marker(scenario_root: Path, kind: str, *, scenario: str | None = None) -> Path:
    """Write the root marker of the given kind and return the marker path."""
    if kind == "static":
        return _write_static_marker(scenario_root, scenario=scenario)
    if kind == "git":
        return _run_git_init(scenario_root, scenario=scenario)
    options = ", ".join(sorted(MARKER_KINDS))
    raise ValueError(f"marker must be one of: {options}.")


def _write_static_marker(scenario_root: Path, *, scenario: str | None) -> Path:
    """Write a minimal, deterministic repository skeleton without invoking git."""
    marker = scenario_root / MARKER_DIR
    try:
        marker.mkdir()
        for relative in _STATIC_DIRS:
            (marker / relative).mkdir(parents=True)
        for name, content in _STATIC_FILES.items():
            (marker / name).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FixtureIOError(
            f"Failed to write root marker: {exc}",
            scenario=scenario,
            operation="write_marker",
            path=marker,
        ) from exc
    return marker


def _run_git_init(scenario_root: Path, *, scenario: str | None) -> Path:
    """Initialize a real repository with the git executable."""
    marker = scenario_root / MARKER_DIR
    git_path = shutil.which("git")
    if git_path is None:
        raise FixtureIOError(
            "git executable not found on PATH.",
            scenario=scenario,
            operation="git_init",
            path=scenario_root,
        )
    completed = subprocess.run(  # nosec B603
        [git_path, "init", "--quiet", str(scenario_root)],
        check=False,
        text=True,
        capture_output=True,
    )
    if completed.returncode != 0:
        raise FixtureIOError(
            "Git command failed (git init):\n"
            f"stdout: {completed.stdout.strip()}\n"
            f"stderr: {completed.stderr.strip()}",
            scenario=scenario,
            operation="git_init",
            path=scenario_root,
        )
    return marker
