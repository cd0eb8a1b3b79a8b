"""Tests for creating, editing and deleting own entries."""

import asyncio
import datetime as dt
from unittest.mock import AsyncMock

import pytest

from timesheet_approval.exceptions import (
    ClosedWindowError,
    DailyLimitExceededError,
    EntryNotFoundError,
    EntryValidationError,
    ImmutableStateError,
    InvalidDateError,
    NotEntryOwnerError,
    StoreUnavailableError,
    SubmissionInProgressError,
    ValidationUnavailableError,
)
from timesheet_approval.models.project import Project
from timesheet_approval.models.timesheet import ApprovalStatus, EntryFields
from timesheet_approval.services.memory_store import (
    InMemoryProjectStore,
    InMemoryTimesheetStore,
)
from timesheet_approval.validators.validator import EntryValidator
from timesheet_approval.workflow.entry_submission import EntrySubmissionService

NOW = dt.datetime(2024, 6, 12, 14, 30, 45)


class SlowTimesheetStore(InMemoryTimesheetStore):
    """In-memory store whose writes yield to the event loop."""

    async def create(self, entry):
        await asyncio.sleep(0)
        return await super().create(entry)


def fields(**overrides) -> EntryFields:
    values = dict(
        date="10/06/2024",
        activity="Task",
        hours=3,
        issue="  Fixed the login redirect  ",
    )
    values.update(overrides)
    return EntryFields(**values)


@pytest.fixture
def service(timesheet_store, project_store):
    return EntrySubmissionService(
        timesheet_store, project_store, clock=lambda: NOW
    )


class TestSubmit:
    """Tests for submit."""

    def test_creates_pending_entry(self, service, timesheet_store):
        entry = asyncio.run(service.submit("apollo", "ana@example.com", fields()))

        assert entry.id == "1"
        assert entry.approval_status == ApprovalStatus.PENDING
        assert entry.date == dt.date(2024, 6, 10)
        assert entry.issue == "Fixed the login redirect"
        assert entry.comment == ""
        assert entry.user == entry.author == "ana@example.com"
        assert entry.unit == "Unit 2"
        assert entry.project_id == "1"
        assert entry.project_name == "Apollo"
        assert entry.created == dt.datetime(2024, 6, 12, 14, 30)
        assert len(asyncio.run(timesheet_store.list())) == 1

    def test_float_hours_stored_as_int(self, service):
        entry = asyncio.run(service.submit("Apollo", "ana@example.com", fields(hours=4.0)))

        assert entry.hours == 4
        assert isinstance(entry.hours, int)

    def test_daily_limit_exceeded(self, make_entry, project_store):
        """Test 6 hours already logged plus 4 more is refused."""
        store = InMemoryTimesheetStore([make_entry("1", date=dt.date(2024, 6, 10), hours=6)])
        service = EntrySubmissionService(store, project_store, clock=lambda: NOW)

        with pytest.raises(DailyLimitExceededError) as exc_info:
            asyncio.run(service.submit("Apollo", "ana@example.com", fields(hours=4)))

        assert exc_info.value.message == (
            "Total hours for this day would be 10. Maximum allowed is 9 hours "
            "per day. You already have 6 hours logged."
        )
        assert len(asyncio.run(store.list())) == 1

    def test_rejected_entries_do_not_count(self, make_entry, project_store):
        store = InMemoryTimesheetStore(
            [
                make_entry(
                    "1",
                    date=dt.date(2024, 6, 10),
                    hours=8,
                    approval_status=ApprovalStatus.REJECTED,
                )
            ]
        )
        service = EntrySubmissionService(store, project_store, clock=lambda: NOW)

        entry = asyncio.run(service.submit("Apollo", "ana@example.com", fields(hours=9)))

        assert entry.hours == 9

    def test_invalid_fields_never_reach_store(self, project_store):
        store = AsyncMock(spec=InMemoryTimesheetStore)
        service = EntrySubmissionService(store, project_store, clock=lambda: NOW)

        with pytest.raises(EntryValidationError) as exc_info:
            asyncio.run(
                service.submit(
                    "Apollo", "ana@example.com", fields(date="08/06/2024", hours=10)
                )
            )

        assert exc_info.value.report.field_errors() == {
            "date": "Weekends are not allowed",
            "hours": "Hours cannot exceed 9",
        }
        store.list.assert_not_called()
        store.create.assert_not_called()

    def test_malformed_form_date_reported(self, service, timesheet_store):
        with pytest.raises(EntryValidationError) as exc_info:
            asyncio.run(
                service.submit(
                    "Apollo", "ana@example.com", fields(date="10-06-2024", hours=0)
                )
            )

        assert exc_info.value.report.field_errors() == {
            "date": "Date must be in DD/MM/YYYY format",
            "hours": "Hours must be greater than 0",
        }
        assert asyncio.run(timesheet_store.list()) == []

    def test_date_before_window(self, service):
        with pytest.raises(EntryValidationError) as exc_info:
            asyncio.run(
                service.submit("Apollo", "ana@example.com", fields(date="05/06/2024"))
            )

        assert exc_info.value.report.field_errors() == {
            "date": "Date must be between 06/06/2024 and 12/06/2024"
        }

    def test_closed_window(self, timesheet_store):
        projects = InMemoryProjectStore(
            [Project(id="1", name="Apollo", start_date="01-01-2024", end_date="31-05-2024")]
        )
        service = EntrySubmissionService(timesheet_store, projects, clock=lambda: NOW)

        with pytest.raises(ClosedWindowError):
            asyncio.run(service.submit("Apollo", "ana@example.com", fields()))

    def test_malformed_project_dates(self, timesheet_store):
        projects = InMemoryProjectStore(
            [Project(id="1", name="Apollo", start_date="2024-01-01", end_date="31-12-2024")]
        )
        service = EntrySubmissionService(timesheet_store, projects, clock=lambda: NOW)

        with pytest.raises(InvalidDateError):
            asyncio.run(service.submit("Apollo", "ana@example.com", fields()))

    def test_unknown_project(self, service):
        with pytest.raises(EntryNotFoundError):
            asyncio.run(service.submit("Vostok", "ana@example.com", fields()))

    def test_store_failure_during_limit_check(self, project_store):
        store = AsyncMock(spec=InMemoryTimesheetStore)
        store.list.side_effect = StoreUnavailableError("Could not connect")
        service = EntrySubmissionService(store, project_store, clock=lambda: NOW)

        with pytest.raises(ValidationUnavailableError):
            asyncio.run(service.submit("Apollo", "ana@example.com", fields()))
        store.create.assert_not_called()

    def test_configured_unit_limit_and_lookback(self, timesheet_store, project_store):
        service = EntrySubmissionService(
            timesheet_store,
            project_store,
            validator=EntryValidator(max_daily_hours=8),
            unit_label="Unit 7",
            business_days_back=1,
            clock=lambda: NOW,
        )

        entry = asyncio.run(
            service.submit("Apollo", "ana@example.com", fields(date="11/06/2024"))
        )
        assert entry.unit == "Unit 7"

        with pytest.raises(EntryValidationError):
            asyncio.run(service.submit("Apollo", "ana@example.com", fields()))

    def test_second_submit_while_in_flight_refused(self, project_store):
        """Test a double click does not create two entries."""
        service = EntrySubmissionService(
            SlowTimesheetStore(), project_store, clock=lambda: NOW
        )

        async def submit_twice():
            first = asyncio.create_task(
                service.submit("Apollo", "ana@example.com", fields())
            )
            await asyncio.sleep(0)
            assert service.is_submitting
            with pytest.raises(SubmissionInProgressError):
                await service.submit("Apollo", "ana@example.com", fields())
            return await first

        entry = asyncio.run(submit_twice())

        assert entry.id == "1"
        assert not service.is_submitting
        assert len(asyncio.run(service.timesheet_store.list())) == 1

    def test_guard_released_after_failure(self, service):
        with pytest.raises(EntryValidationError):
            asyncio.run(service.submit("Apollo", "ana@example.com", fields(hours=0)))

        assert not service.is_submitting
        assert asyncio.run(service.submit("Apollo", "ana@example.com", fields())).id == "1"


class TestResolveWindow:
    """Tests for resolve_window."""

    def test_uses_clock(self, service):
        window = asyncio.run(service.resolve_window("Apollo"))

        assert window.min_date == dt.date(2024, 6, 6)
        assert window.max_date == dt.date(2024, 6, 12)

    def test_explicit_today(self, service):
        window = asyncio.run(service.resolve_window("Apollo", dt.date(2024, 6, 17)))

        assert window.min_date == dt.date(2024, 6, 11)


class TestEditAndDelete:
    """Tests for edit and delete of own entries."""

    @pytest.fixture
    def store(self, make_entry):
        return InMemoryTimesheetStore(
            [
                make_entry("1", date=dt.date(2024, 6, 10), hours=4),
                make_entry("2", date=dt.date(2024, 6, 10), hours=3),
                make_entry("3", approval_status=ApprovalStatus.APPROVED),
                make_entry("4", user="bob@example.com"),
            ]
        )

    @pytest.fixture
    def service(self, store, project_store):
        return EntrySubmissionService(store, project_store, clock=lambda: NOW)

    def test_edit_excludes_own_hours_from_limit(self, service, store):
        """Test raising entry 1 from 4 to 6 hours with 3 other hours that day."""
        updated = asyncio.run(
            service.edit("1", "ana@example.com", fields(hours=6, activity="Interview"))
        )

        assert updated.hours == 6
        assert updated.activity.value == "Interview"
        assert updated.issue == "Fixed the login redirect"
        assert asyncio.run(store.get("1")).hours == 6

    def test_edit_over_limit(self, service):
        with pytest.raises(DailyLimitExceededError) as exc_info:
            asyncio.run(service.edit("1", "ana@example.com", fields(hours=7)))

        assert exc_info.value.existing == 3
        assert exc_info.value.attempted == 10

    def test_edit_approved_entry(self, service):
        with pytest.raises(ImmutableStateError) as exc_info:
            asyncio.run(service.edit("3", "ana@example.com", fields()))

        assert exc_info.value.action == "edit"

    def test_edit_other_users_entry(self, service):
        with pytest.raises(NotEntryOwnerError) as exc_info:
            asyncio.run(service.edit("4", "ana@example.com", fields()))

        assert exc_info.value.code == "NOT_OWNER"

    def test_edit_missing_entry(self, service):
        with pytest.raises(EntryNotFoundError):
            asyncio.run(service.edit("99", "ana@example.com", fields()))

    def test_delete_pending(self, service, store):
        asyncio.run(service.delete("2", "ana@example.com"))

        assert sorted(e.id for e in asyncio.run(store.list())) == ["1", "3", "4"]

    def test_delete_approved_refused(self, service, store):
        with pytest.raises(ImmutableStateError):
            asyncio.run(service.delete("3", "ana@example.com"))

        assert len(asyncio.run(store.list())) == 4

    def test_delete_other_users_entry(self, service):
        with pytest.raises(NotEntryOwnerError):
            asyncio.run(service.delete("4", "ana@example.com"))
