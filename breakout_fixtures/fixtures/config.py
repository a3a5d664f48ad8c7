"""Output-root resolution and option validation."""

from __future__ import annotations

import os
from pathlib import Path

from breakout_fixtures.fixtures.markers import MARKER_KINDS

OUTPUT_ROOT_ENV = "BREAKOUT_FIXTURES_ROOT"
DEFAULT_OUTPUT_ROOT = Path("breakout-fixtures")


def resolve_output_root(output_root: Path | None = None) -> Path:
    """Resolve the output root from an explicit value, the environment or the default."""
    if output_root is not None:
        return Path(os.path.abspath(output_root.expanduser()))
    env_value = os.environ.get(OUTPUT_ROOT_ENV)
    if env_value:
        return Path(os.path.abspath(Path(env_value).expanduser()))
    return Path(os.path.abspath(DEFAULT_OUTPUT_ROOT))


def validate_choice(value: str, field_name: str, allowed: set[str] | frozenset[str]) -> str:
    """Validate that a string value is within a set of allowed options."""
    if value not in allowed:
        options = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {options}.")
    return value


def validate_marker(value: str) -> str:
    """Validate root marker kind option."""
    return validate_choice(value, "marker", MARKER_KINDS)
