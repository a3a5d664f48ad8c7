"""Default scenario catalog and the per-scenario generation run."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from breakout_fixtures.fixtures.builder import FixtureBuilder
from breakout_fixtures.fixtures.errors import FixtureError, FixtureIOError
from breakout_fixtures.fixtures.models import (
    AliasSpec,
    GenerationReport,
    LinkSpec,
    Probe,
    ScenarioHandle,
    ScenarioOutcome,
    ScenarioSpec,
)
from breakout_fixtures.fixtures.paths import parent_parts
from breakout_fixtures.logging_utils import fixture_context, get_logger

CatalogEntry = ScenarioSpec | AliasSpec

NESTED_BREAKOUT = ScenarioSpec(
    name="nested-breakout",
    description="Escape link hidden one directory below the scenario root.",
    links=(LinkSpec(parent_path="hide", link_name="breakout"),),
    probes=(Probe("hide/breakout"), Probe("hide/../hide/breakout")),
)

IMMEDIATE_BREAKOUT = ScenarioSpec(
    name="immediate-breakout",
    description="Escape link placed directly under the scenario root.",
    links=(LinkSpec(parent_path="", link_name="breakout"),),
    probes=(Probe("breakout"),),
)

ALIAS_TO_NESTED = AliasSpec(
    name="alias-to-nested",
    target_scenario=NESTED_BREAKOUT.name,
    description="Output-root alias naming the nested breakout scenario.",
)


def default_catalog() -> tuple[CatalogEntry, ...]:
    """Return the documented scenario set in generation order."""
    return (NESTED_BREAKOUT, IMMEDIATE_BREAKOUT, ALIAS_TO_NESTED)


def ensure_unique_names(entries: Sequence[CatalogEntry]) -> None:
    """Reject catalogs that would create two entries under the same name."""
    seen: set[str] = set()
    for entry in entries:
        if entry.name in seen:
            raise ValueError(f"Duplicate scenario name in catalog: {entry.name}")
        seen.add(entry.name)


def build_scenario(
    builder: FixtureBuilder,
    output_root: Path,
    spec: ScenarioSpec,
    *,
    marker: str | None = None,
) -> ScenarioHandle:
    """Create one scenario and all of its links, stopping at the first error."""
    handle = builder.init_scenario(output_root, spec.name, marker=marker or spec.marker)
    for link in spec.links:
        if parent_parts(link.parent_path):
            builder.add_nested_escape_link(
                handle, link.parent_path, link.link_name, link.escape_depth
            )
        else:
            builder.add_root_level_escape_link(handle, link.link_name, link.escape_depth)
    return handle


def generate_fixtures(
    output_root: Path,
    entries: Sequence[CatalogEntry] | None = None,
    *,
    builder: FixtureBuilder | None = None,
    marker: str | None = None,
    keep_going: bool = False,
) -> GenerationReport:
    """Build every catalog entry under output_root and report per-entry outcomes.

    AlreadyExistsError and LinkCreationError only fail the entry they occur in.
    FixtureIOError aborts the remaining entries unless keep_going is set.
    Completed entries and partially built ones are left on disk.
    """
    logger = get_logger()
    selected = tuple(entries) if entries is not None else default_catalog()
    ensure_unique_names(selected)
    output_root = Path(os.path.abspath(output_root))
    builder = builder or FixtureBuilder()
    outcomes: list[ScenarioOutcome] = []
    aborted = False
    for entry in selected:
        path = output_root / entry.name
        try:
            if isinstance(entry, AliasSpec):
                builder.add_alias_link(output_root, entry.name, entry.target_scenario)
            else:
                build_scenario(builder, output_root, entry, marker=marker)
        except FixtureError as exc:
            logger.error(
                "Scenario failed: %s",
                exc,
                extra=fixture_context(entry.name, exc.operation, exc.path),
            )
            outcomes.append(
                ScenarioOutcome(
                    name=entry.name,
                    ok=False,
                    path=path,
                    error_kind=exc.kind,
                    message=str(exc),
                )
            )
            if isinstance(exc, FixtureIOError) and not keep_going:
                aborted = True
                break
            continue
        outcomes.append(ScenarioOutcome(name=entry.name, ok=True, path=path))
    report = GenerationReport(output_root=output_root, outcomes=tuple(outcomes), aborted=aborted)
    logger.info(
        "Generation finished under %s: %d ok, %d failed, aborted=%s",
        output_root,
        len(outcomes) - len(report.failed),
        len(report.failed),
        aborted,
    )
    return report
