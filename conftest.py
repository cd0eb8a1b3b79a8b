"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import os
from typing import Dict

import pytest

from timesheet_approval.config import AppSettings, reload_config
from timesheet_approval.models import (
    Activity,
    ApprovalStatus,
    NewTimesheetEntry,
    Project,
    TimesheetEntry,
)
from timesheet_approval.services.memory_store import (
    InMemoryProjectStore,
    InMemoryTimesheetStore,
)

# Wednesday
TODAY = dt.date(2024, 6, 12)
NOW = dt.datetime(2024, 6, 12, 14, 30)


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "TIMESHEET_STORE_URL": "http://timesheets.test:3000/",
        "REQUEST_TIMEOUT": "5",
        "MAX_RETRIES": "2",
        "RETRY_DELAY": "0.5",
        "ENVIRONMENT": "testing",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "MAX_DAILY_HOURS": "8",
        "ENTRY_WINDOW_BUSINESS_DAYS": "3",
        "DEFAULT_UNIT": "Unit 7",
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import timesheet_approval.config.settings
    timesheet_approval.config.settings._config = None

    yield test_env_vars

    timesheet_approval.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> AppSettings:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def make_entry():
    """Factory for stored timesheet entries with sensible defaults."""

    def _make(entry_id="1", **overrides) -> TimesheetEntry:
        values = dict(
            id=entry_id,
            date=TODAY,
            user="ana@example.com",
            activity=Activity.TASK,
            issue="Implemented the login form",
            comment="",
            hours=4,
            approval_status=ApprovalStatus.PENDING,
            created=NOW,
            unit="Unit 2",
            author="ana@example.com",
            project_id="1",
            project_name="Apollo",
        )
        values.update(overrides)
        return TimesheetEntry(**values)

    return _make


@pytest.fixture
def new_entry() -> NewTimesheetEntry:
    return NewTimesheetEntry(
        date=TODAY,
        user="ana@example.com",
        activity=Activity.TASK,
        issue="Implemented the login form",
        hours=4,
        created=NOW,
        unit="Unit 2",
        author="ana@example.com",
        project_id="1",
        project_name="Apollo",
    )


@pytest.fixture
def project() -> Project:
    """A project running through the whole of 2024."""
    return Project(
        id="1",
        name="Apollo",
        code="APL",
        start_date="01-01-2024",
        end_date="31-12-2024",
        assigned_users=["ana@example.com"],
        project_manager="pm@example.com",
    )


@pytest.fixture
def project_store(project) -> InMemoryProjectStore:
    return InMemoryProjectStore([project])


@pytest.fixture
def timesheet_store() -> InMemoryTimesheetStore:
    return InMemoryTimesheetStore()


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    for file in ["coverage.xml", ".coverage"]:
        if os.path.exists(file):
            os.remove(file)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to tests under tests/unit/."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
