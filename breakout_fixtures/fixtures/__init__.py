"""Fixture models, builder and generation run exports."""

from breakout_fixtures.fixtures.builder import FixtureBuilder
from breakout_fixtures.fixtures.catalog import build_scenario, default_catalog, generate_fixtures
from breakout_fixtures.fixtures.errors import (
    AlreadyExistsError,
    FixtureError,
    FixtureIOError,
    LinkCreationError,
)
from breakout_fixtures.fixtures.models import (
    AliasSpec,
    GenerationReport,
    LinkSpec,
    Probe,
    ScenarioHandle,
    ScenarioOutcome,
    ScenarioSpec,
)

__all__ = [
    "FixtureBuilder",
    "build_scenario",
    "default_catalog",
    "generate_fixtures",
    "AlreadyExistsError",
    "FixtureError",
    "FixtureIOError",
    "LinkCreationError",
    "AliasSpec",
    "GenerationReport",
    "LinkSpec",
    "Probe",
    "ScenarioHandle",
    "ScenarioOutcome",
    "ScenarioSpec",
]
