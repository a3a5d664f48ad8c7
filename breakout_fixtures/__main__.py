"""Module entrypoint for python -m breakout_fixtures."""

from __future__ import annotations

from breakout_fixtures.cli import app

if __name__ == "__main__":
    app(prog_name="breakout-fixtures", default_map={"json_logs": True})
