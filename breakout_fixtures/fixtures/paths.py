"""Lexical path helpers for computing and checking escape targets."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path, PurePosixPath

PARENT_SEGMENT = ".."


def validate_component(value: str, field_name: str) -> str:
    """Validate that value is a single, non-special path component."""
    if not value or value in {".", PARENT_SEGMENT}:
        raise ValueError(f"{field_name} must be a plain file name, got {value!r}.")
    if "/" in value or "\\" in value or "\x00" in value:
        raise ValueError(f"{field_name} must not contain path separators: {value!r}.")
    return value


def parent_parts(relative_parent_path: str | PurePosixPath) -> tuple[str, ...]:
    """Split a scenario-relative parent path into its directory components.

    Empty strings and "." refer to the scenario root itself. Absolute paths and
    parent references are rejected because the nesting depth could no longer be
    derived from the path structure.
    """
    raw = str(relative_parent_path).replace("\\", "/")
    path = PurePosixPath(raw)
    if path.is_absolute():
        raise ValueError(f"Parent path must be relative to the scenario root: {raw!r}.")
    parts = tuple(part for part in path.parts if part != ".")
    if PARENT_SEGMENT in parts:
        raise ValueError(f"Parent path must not contain '..' components: {raw!r}.")
    return parts


def nesting_depth(relative_parent_path: str | PurePosixPath) -> int:
    """Return how many directories separate the parent path from the scenario root."""
    return len(parent_parts(relative_parent_path))


def escape_target(relative_parent_path: str | PurePosixPath, escape_depth: int) -> str:
    """Compute the relative link target that leaves the scenario root.

    The target holds one ".." per nesting level to get back to the root plus
    escape_depth more to get out of it.
    """
    if not isinstance(escape_depth, int) or isinstance(escape_depth, bool):
        raise ValueError(f"escape_depth must be an integer, got {escape_depth!r}.")
    if escape_depth < 1:
        raise ValueError(
            f"escape_depth must be at least 1 to leave the scenario root, got {escape_depth}."
        )
    count = nesting_depth(relative_parent_path) + escape_depth
    return posixpath.join(*([PARENT_SEGMENT] * count))


def resolve_lexically(link_path: Path, target: str) -> Path:
    """Resolve a link target against the link's directory without touching the disk."""
    return Path(os.path.normpath(link_path.parent / target))


def is_outside(root: Path, candidate: Path) -> bool:
    """Return whether candidate lies strictly outside root, compared lexically."""
    normalized_root = Path(os.path.normpath(root))
    normalized = Path(os.path.normpath(candidate))
    return normalized != normalized_root and normalized_root not in normalized.parents


def symlink_component_index(probe: str) -> int:
    """Return the index of the last component of a probe once "x/.." pairs collapse."""
    normalized = posixpath.normpath(probe.replace("\\", "/"))
    return len(PurePosixPath(normalized).parts) - 1
