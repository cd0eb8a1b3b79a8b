"""Fixtures for CLI tests: in-memory stores behind every command."""

import datetime as dt
import importlib

import pytest
from click.testing import CliRunner

from timesheet_approval.models import Project
from timesheet_approval.services.memory_store import (
    InMemoryProjectStore,
    InMemoryTimesheetStore,
)

COMMAND_MODULES = [
    "timesheet_approval.cli.commands.list",
    "timesheet_approval.cli.commands.log_time",
    "timesheet_approval.cli.commands.own_entries",
    "timesheet_approval.cli.commands.projects",
    "timesheet_approval.cli.commands.review",
    "timesheet_approval.cli.commands.summary",
    "timesheet_approval.cli.commands.window",
]


def latest_weekday(day: dt.date) -> dt.date:
    """The given day, or the Friday before it when it falls on a weekend."""
    while day.weekday() >= 5:
        day -= dt.timedelta(days=1)
    return day


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def long_project() -> Project:
    """A project open far beyond any day the tests run on."""
    return Project(
        id="1",
        name="Apollo",
        code="APL",
        start_date="01-01-2000",
        end_date="31-12-2099",
        assigned_users=["ana@example.com", "bob@example.com"],
        project_manager="pm@example.com",
    )


@pytest.fixture
def cli_stores(mock_env, monkeypatch, long_project):
    """Point every command at the same pair of in-memory stores."""
    timesheet_store = InMemoryTimesheetStore()
    project_store = InMemoryProjectStore([long_project])

    for module in COMMAND_MODULES:
        # The package re-exports commands under the module names
        monkeypatch.setattr(
            importlib.import_module(module),
            "build_stores",
            lambda settings: (timesheet_store, project_store),
        )

    return timesheet_store, project_store


@pytest.fixture
def seed(cli_stores):
    """Replace the stored entries with the given ones."""
    timesheet_store, _ = cli_stores

    def _seed(*entries):
        timesheet_store._entries = {entry.id: entry for entry in entries}
        return timesheet_store

    return _seed


@pytest.fixture
def work_day() -> dt.date:
    """A loggable day inside the entry window as seen from the real clock."""
    return latest_weekday(dt.date.today())
