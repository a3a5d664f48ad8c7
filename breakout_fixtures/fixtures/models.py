"""Data models describing fixture scenarios and generation outcomes."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from pathlib import Path

from breakout_fixtures.fixtures.paths import (
    escape_target,
    parent_parts,
    symlink_component_index,
    validate_component,
)


@dataclass(frozen=True)
class LinkSpec:
    """One symbolic link to materialize inside a scenario."""

    parent_path: str
    link_name: str
    escape_depth: int = 1

    def __post_init__(self) -> None:
        """Validate link placement eagerly so bad specs fail before touching disk."""
        parent_parts(self.parent_path)
        validate_component(self.link_name, "link_name")
        escape_target(self.parent_path, self.escape_depth)

    @property
    def relative_path(self) -> str:
        """Return the link path relative to the scenario root."""
        return posixpath.join(*parent_parts(self.parent_path), self.link_name)

    @property
    def target(self) -> str:
        """Return the relative target derived from nesting and escape depth."""
        return escape_target(self.parent_path, self.escape_depth)

    def to_dict(self) -> dict[str, object]:
        """Serialize the link spec including its computed target."""
        return {
            "parent_path": self.parent_path,
            "link_name": self.link_name,
            "escape_depth": self.escape_depth,
            "target": self.target,
        }


@dataclass(frozen=True)
class Probe:
    """A scenario-relative path a containment checker is expected to reject."""

    path: str

    @property
    def symlink_component(self) -> int:
        """Index of the link component once "x/.." pairs in the probe collapse.

        Probes end at the link they exercise, so this is also the first
        symlinked component a checker meets.
        """
        return symlink_component_index(self.path)

    def to_dict(self) -> dict[str, object]:
        """Serialize the probe."""
        return {"path": self.path, "symlink_component": self.symlink_component}


@dataclass(frozen=True)
class ScenarioSpec:
    """A named adversarial tree with a root marker and escape links."""

    name: str
    links: tuple[LinkSpec, ...]
    description: str = ""
    marker: str | None = None
    probes: tuple[Probe, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate the scenario name."""
        validate_component(self.name, "scenario name")

    def to_dict(self) -> dict[str, object]:
        """Serialize the scenario spec."""
        return {
            "kind": "scenario",
            "name": self.name,
            "description": self.description,
            "marker": self.marker,
            "links": [link.to_dict() for link in self.links],
            "probes": [probe.to_dict() for probe in self.probes],
        }


@dataclass(frozen=True)
class AliasSpec:
    """A plain symbolic link in the output root naming a scenario directory."""

    name: str
    target_scenario: str
    description: str = ""

    def __post_init__(self) -> None:
        """Validate alias and target names."""
        validate_component(self.name, "alias name")
        validate_component(self.target_scenario, "target scenario name")

    def to_dict(self) -> dict[str, object]:
        """Serialize the alias spec."""
        return {
            "kind": "alias",
            "name": self.name,
            "description": self.description,
            "target": self.target_scenario,
        }


@dataclass(frozen=True)
class ScenarioHandle:
    """Reference to a scenario directory created on disk."""

    name: str
    root: Path
    output_root: Path


@dataclass(frozen=True)
class ScenarioOutcome:
    """Result of constructing one scenario or alias during a generation run."""

    name: str
    ok: bool
    path: Path
    error_kind: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialize the outcome."""
        return {
            "name": self.name,
            "ok": self.ok,
            "path": str(self.path),
            "error_kind": self.error_kind,
            "message": self.message,
        }


@dataclass(frozen=True)
class GenerationReport:
    """Per-scenario outcomes of one generation run."""

    output_root: Path
    outcomes: tuple[ScenarioOutcome, ...]
    aborted: bool = False

    @property
    def ok(self) -> bool:
        """Return whether every attempted scenario succeeded and the run completed."""
        return not self.aborted and all(outcome.ok for outcome in self.outcomes)

    @property
    def failed(self) -> list[ScenarioOutcome]:
        """Return outcomes that failed."""
        return [outcome for outcome in self.outcomes if not outcome.ok]

    def to_dict(self) -> dict[str, object]:
        """Serialize the report."""
        return {
            "output_root": str(self.output_root),
            "ok": self.ok,
            "aborted": self.aborted,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }
