"""Error taxonomy for fixture construction."""

from __future__ import annotations

from pathlib import Path


class FixtureError(RuntimeError):
    """Base error carrying the scenario, operation and path that failed."""

    kind = "error"

    def __init__(
        self,
        message: str,
        *,
        scenario: str | None = None,
        operation: str | None = None,
        path: Path | None = None,
    ) -> None:
        """Store diagnostic context and render it into the message."""
        self.scenario = scenario
        self.operation = operation
        self.path = path
        context = [
            f"{label}={value}"
            for label, value in (("scenario", scenario), ("operation", operation), ("path", path))
            if value is not None
        ]
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class AlreadyExistsError(FixtureError):
    """Raised when a scenario or link path is already present."""

    kind = "already_exists"


class FixtureIOError(FixtureError):
    """Raised when directory creation or marker writing fails."""

    kind = "io_error"


class LinkCreationError(FixtureError):
    """Raised when the platform refuses or cannot create a symbolic link."""

    kind = "link_creation"
