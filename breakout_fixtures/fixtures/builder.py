"""Construction of adversarial scenario trees on disk."""

from __future__ import annotations

import os
from pathlib import Path

from breakout_fixtures.fixtures.config import validate_marker
from breakout_fixtures.fixtures.errors import (
    AlreadyExistsError,
    FixtureIOError,
    LinkCreationError,
)
from breakout_fixtures.fixtures.markers import write_marker
from breakout_fixtures.fixtures.models import ScenarioHandle
from breakout_fixtures.fixtures.paths import (
    escape_target,
    is_outside,
    parent_parts,
    resolve_lexically,
    validate_component,
)
from breakout_fixtures.logging_utils import fixture_context, get_logger


class FixtureBuilder:
    """Creates scenario directories, escape links and alias links.

    Every operation takes explicit paths and performs one synchronous
    filesystem effect. Nothing is retried and nothing is rolled back.
    """

    def __init__(self, marker: str = "static") -> None:
        """Initialize the builder with the default root marker kind."""
        self.marker = marker
        self.logger = get_logger()

    def init_scenario(
        self,
        output_root: Path,
        name: str,
        *,
        marker: str | None = None,
    ) -> ScenarioHandle:
        """Create output_root/name and write its root marker."""
        validate_component(name, "scenario name")
        marker_kind = validate_marker(marker or self.marker)
        output_root = Path(os.path.abspath(output_root))
        _ensure_directory(output_root, scenario=name, operation="create_output_root")
        root = output_root / name
        if root.is_symlink() or (root.exists() and not _is_empty_directory(root)):
            raise AlreadyExistsError(
                "Scenario path already exists",
                scenario=name,
                operation="init_scenario",
                path=root,
            )
        try:
            root.mkdir(exist_ok=True)
        except OSError as exc:
            raise FixtureIOError(
                f"Failed to create scenario directory: {exc}",
                scenario=name,
                operation="init_scenario",
                path=root,
            ) from exc
        marker_path = write_marker(root, marker_kind, scenario=name)
        self.logger.info(
            "Initialized scenario with %s marker",
            marker_kind,
            extra=fixture_context(name, "init_scenario", marker_path),
        )
        return ScenarioHandle(name=name, root=root, output_root=output_root)

    def add_nested_escape_link(
        self,
        handle: ScenarioHandle,
        relative_parent_path: str,
        link_name: str,
        escape_depth: int = 1,
    ) -> Path:
        """Create a link under relative_parent_path whose target leaves the scenario root."""
        parts = parent_parts(relative_parent_path)
        validate_component(link_name, "link_name")
        target = escape_target(relative_parent_path, escape_depth)
        parent = handle.root.joinpath(*parts)
        self._ensure_parent(handle, parts)
        link_path = parent / link_name
        resolved = resolve_lexically(link_path, target)
        if not is_outside(handle.root, resolved):
            raise ValueError(f"Link target {target!r} at {link_path} does not leave {handle.root}.")
        _create_symlink(link_path, target, scenario=handle.name, operation="add_escape_link")
        self.logger.info(
            "Created escape link -> %s (resolves to %s)",
            target,
            resolved,
            extra=fixture_context(handle.name, "add_escape_link", link_path),
        )
        return link_path

    def add_root_level_escape_link(
        self,
        handle: ScenarioHandle,
        link_name: str,
        escape_depth: int = 1,
    ) -> Path:
        """Create an escape link directly under the scenario root."""
        return self.add_nested_escape_link(handle, "", link_name, escape_depth)

    def add_alias_link(self, output_root: Path, alias_name: str, target_scenario_name: str) -> Path:
        """Create output_root/alias_name pointing at a scenario directory by name."""
        validate_component(alias_name, "alias name")
        validate_component(target_scenario_name, "target scenario name")
        output_root = Path(os.path.abspath(output_root))
        _ensure_directory(output_root, scenario=alias_name, operation="create_output_root")
        link_path = output_root / alias_name
        _create_symlink(
            link_path,
            target_scenario_name,
            scenario=alias_name,
            operation="add_alias_link",
        )
        self.logger.info(
            "Created alias link -> %s",
            target_scenario_name,
            extra=fixture_context(alias_name, "add_alias_link", link_path),
        )
        return link_path

    def _ensure_parent(self, handle: ScenarioHandle, parts: tuple[str, ...]) -> None:
        """Create the link's parent directories one component at a time."""
        current = handle.root
        for part in parts:
            current = current / part
            if current.is_symlink():
                raise FixtureIOError(
                    "Parent path passes through a symbolic link",
                    scenario=handle.name,
                    operation="create_parent",
                    path=current,
                )
            _ensure_directory(current, scenario=handle.name, operation="create_parent")


def _is_empty_directory(path: Path) -> bool:
    """Return whether path is a directory with no entries."""
    if not path.is_dir():
        return False
    return next(path.iterdir(), None) is None


def _ensure_directory(path: Path, *, scenario: str, operation: str) -> None:
    """Create a directory and its parents, mapping failures to FixtureIOError."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FixtureIOError(
            f"Failed to create directory: {exc}",
            scenario=scenario,
            operation=operation,
            path=path,
        ) from exc


def _create_symlink(link_path: Path, target: str, *, scenario: str, operation: str) -> None:
    """Create a directory symlink, mapping failures to the fixture error taxonomy."""
    if os.path.lexists(link_path):
        raise AlreadyExistsError(
            "Link path already exists",
            scenario=scenario,
            operation=operation,
            path=link_path,
        )
    try:
        link_path.symlink_to(target, target_is_directory=True)
    except FileExistsError as exc:
        raise AlreadyExistsError(
            "Link path already exists",
            scenario=scenario,
            operation=operation,
            path=link_path,
        ) from exc
    except (NotImplementedError, OSError) as exc:
        raise LinkCreationError(
            f"Platform refused symbolic link creation: {exc}",
            scenario=scenario,
            operation=operation,
            path=link_path,
        ) from exc
