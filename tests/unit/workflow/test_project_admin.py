"""Tests for creating and editing projects."""

import asyncio
import datetime as dt
from unittest.mock import AsyncMock

import pytest

from timesheet_approval.exceptions import (
    EntryNotFoundError,
    EntryValidationError,
    StoreUnavailableError,
)
from timesheet_approval.services.memory_store import InMemoryProjectStore
from timesheet_approval.workflow.project_admin import ProjectAdminService

# Wednesday
TODAY = dt.date(2024, 6, 12)


@pytest.fixture
def service(project_store):
    return ProjectAdminService(project_store, clock=lambda: TODAY)


def create(service, name="Gemini", **overrides):
    values = dict(
        code="GEM",
        start_date="01-07-2024",
        end_date="31-12-2024",
        manager="pm@example.com",
        assigned_users=["ana@example.com"],
    )
    values.update(overrides)
    return asyncio.run(service.create(name, **values))


class TestCreate:
    """Tests for create."""

    def test_stores_active_project(self, service, project_store):
        result = create(service, description="  Second stage  ")

        project = result.project
        assert project.id == "2"
        assert project.status == "Active"
        assert project.project_manager == "pm@example.com"
        assert project.description == "Second stage"
        assert result.warnings == []
        assert asyncio.run(project_store.get_by_name("gemini")).id == "2"

    def test_dates_stored_zero_padded(self, service):
        result = create(service, start_date="1-7-2024", end_date=" 31-12-2024 ")

        assert result.project.start_date == "01-07-2024"
        assert result.project.end_date == "31-12-2024"

    def test_duplicate_users_collapsed(self, service):
        result = create(
            service, assigned_users=["ana@example.com", "ANA@example.com ", "bob@example.com"]
        )

        assert result.project.assigned_users == ["ana@example.com", "bob@example.com"]

    def test_no_assigned_users_is_a_warning(self, service):
        result = create(service, assigned_users=[])

        assert result.project.assigned_users == []
        assert [w.message for w in result.warnings] == [
            "No users are assigned to this project"
        ]

    def test_invalid_form_never_reaches_store(self, service, project_store):
        with pytest.raises(EntryValidationError) as exc_info:
            create(
                service,
                name="apollo",
                code=" ",
                start_date="01-06-2024",
                end_date="15-06-2024",
            )

        assert exc_info.value.message.startswith("Project is invalid")
        assert exc_info.value.report.field_errors() == {
            "name": "A project named 'Apollo' already exists",
            "code": "Project code is required",
            "start_date": "Start date cannot be in the past",
            "end_date": "Project must run for at least 30 days",
        }
        assert len(asyncio.run(project_store.list())) == 1

    def test_malformed_date_reported(self, service, project_store):
        with pytest.raises(EntryValidationError) as exc_info:
            create(service, start_date="2024-07-01")

        assert "start_date" in exc_info.value.report.field_errors()
        assert len(asyncio.run(project_store.list())) == 1

    def test_store_failure_propagates(self):
        store = AsyncMock(spec=InMemoryProjectStore)
        store.list.side_effect = StoreUnavailableError("Connection refused")
        service = ProjectAdminService(store, clock=lambda: TODAY)

        with pytest.raises(StoreUnavailableError):
            create(service)

        store.create.assert_not_called()


class TestUpdate:
    """Tests for update."""

    def test_past_start_allowed_when_editing(self, service, project_store):
        result = asyncio.run(
            service.update("APOLLO", {"end_date": "31-03-2025", "code": " APX "})
        )

        assert result.project.id == "1"
        assert result.project.start_date == "01-01-2024"
        assert result.project.end_date == "31-03-2025"
        assert result.project.code == "APX"
        stored = asyncio.run(project_store.get_by_name("Apollo"))
        assert stored.end_date == "31-03-2025"

    def test_assigned_users_replaced(self, service):
        result = asyncio.run(
            service.update("Apollo", {"assigned_users": ["bob@example.com"]})
        )

        assert result.project.assigned_users == ["bob@example.com"]
        assert result.project.includes_user("pm@example.com")

    def test_rename_to_existing_name_rejected(self, service, project_store):
        create(service)

        with pytest.raises(EntryValidationError) as exc_info:
            asyncio.run(service.update("Apollo", {"name": "GEMINI"}))

        assert exc_info.value.report.field_errors() == {
            "name": "A project named 'Gemini' already exists"
        }
        assert asyncio.run(project_store.get_by_name("Apollo")) is not None

    def test_schedule_rules_apply_to_merged_values(self, service, project_store):
        with pytest.raises(EntryValidationError) as exc_info:
            asyncio.run(service.update("Apollo", {"end_date": "15-01-2024"}))

        assert exc_info.value.report.field_errors() == {
            "end_date": "Project must run for at least 30 days"
        }
        assert asyncio.run(project_store.get_by_name("Apollo")).end_date == "31-12-2024"

    def test_unknown_project(self, service):
        with pytest.raises(EntryNotFoundError, match="Vostok"):
            asyncio.run(service.update("Vostok", {"code": "VST"}))

    def test_id_is_not_editable(self, service):
        with pytest.raises(ValueError, match="id"):
            asyncio.run(service.update("Apollo", {"id": "9"}))
