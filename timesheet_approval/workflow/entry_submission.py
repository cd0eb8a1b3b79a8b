"""Creating, editing and deleting a user's own timesheet entries.

A submission runs strictly in sequence: resolve the project window,
validate the form, check the daily hour cap against the store, and only
then write. While one submission is in flight a second one is refused,
not queued.
"""

import contextlib
import datetime as dt
import logging
from typing import Callable, Optional

from timesheet_approval.calculators.entry_window import (
    DEFAULT_BUSINESS_DAYS_BACK,
    EntryWindow,
    resolve_entry_window,
)
from timesheet_approval.exceptions import (
    EntryNotFoundError,
    EntryValidationError,
    ImmutableStateError,
    NotEntryOwnerError,
    SubmissionInProgressError,
)
from timesheet_approval.models.project import Project
from timesheet_approval.models.timesheet import (
    ApprovalStatus,
    EntryFields,
    NewTimesheetEntry,
    TimesheetEntry,
)
from timesheet_approval.services.stores import ProjectStore, TimesheetStore
from timesheet_approval.utils.date_formats import format_entry_date
from timesheet_approval.utils.logging_utils import LogContext, log_function_call
from timesheet_approval.validators.validator import EntryValidator

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "Unit 2"


class EntrySubmissionService:
    """Validated create, edit and delete of timesheet entries.

    Attributes:
        timesheet_store: Store the entries are written to
        project_store: Store the project bounds are read from
        validator: Entry validator (field rules and daily cap)
        unit_label: Unit stamped on new entries
        business_days_back: Weekdays a user may reach back from today
        clock: Returns the current local time

    Example:
        >>> service = EntrySubmissionService(timesheet_store, project_store)
        >>> fields = EntryFields(date="10/06/2024", activity="Task", hours=3,
        ...                      issue="Fixed the login redirect")
        >>> entry = await service.submit("Apollo", "ana@example.com", fields)
        >>> entry.approval_status
        <ApprovalStatus.PENDING: 'Pending'>
    """

    def __init__(
        self,
        timesheet_store: TimesheetStore,
        project_store: ProjectStore,
        validator: Optional[EntryValidator] = None,
        unit_label: str = DEFAULT_UNIT,
        business_days_back: int = DEFAULT_BUSINESS_DAYS_BACK,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self.timesheet_store = timesheet_store
        self.project_store = project_store
        self.validator = validator or EntryValidator()
        self.unit_label = unit_label
        self.business_days_back = business_days_back
        self.clock = clock
        self._in_flight = False

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    @contextlib.contextmanager
    def _submission(self):
        if self._in_flight:
            raise SubmissionInProgressError()
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False

    async def load_project(self, project_name: str) -> Project:
        """Look up a project by name.

        Raises:
            EntryNotFoundError: If no project has that name
        """
        project = await self.project_store.get_by_name(project_name)
        if project is None:
            raise EntryNotFoundError(f"Project '{project_name}' not found")
        return project

    async def resolve_window(
        self, project_name: str, today: Optional[dt.date] = None
    ) -> EntryWindow:
        """Resolve the entry window of a project; the window may be closed.

        Raises:
            EntryNotFoundError: If the project does not exist
            InvalidDateError: If the project's dates are malformed
        """
        project = await self.load_project(project_name)
        return resolve_entry_window(
            project, today or self.clock().date(), self.business_days_back
        )

    async def _open_window(self, project: Project, today: dt.date) -> EntryWindow:
        window = resolve_entry_window(project, today, self.business_days_back)
        return window.ensure_open()

    def _validate_fields(self, fields: EntryFields, window: EntryWindow) -> None:
        report = self.validator.validate(fields, window)
        if not report.is_valid():
            raise EntryValidationError(report)

    @log_function_call(level="DEBUG")
    async def submit(
        self, project_name: str, user: str, fields: EntryFields
    ) -> TimesheetEntry:
        """Validate and store a new entry for ``user``.

        Args:
            project_name: Project to log time on
            user: Email of the acting user, who becomes owner and author
            fields: Submitted form values

        Returns:
            The stored entry, Pending

        Raises:
            SubmissionInProgressError: If a submission is already running
            EntryNotFoundError: If the project does not exist
            InvalidDateError: If the project's dates are malformed
            ClosedWindowError: If no day can be logged on the project
            EntryValidationError: If any form field is invalid
            DailyLimitExceededError: If the day would exceed the hour cap
            ValidationUnavailableError: If the cap could not be checked
            StoreUnavailableError: If the write failed
        """
        with self._submission(), LogContext(user=user, project=project_name):
            now = self.clock()
            project = await self.load_project(project_name)
            window = await self._open_window(project, now.date())
            self._validate_fields(fields, window)

            day = fields.parsed_date()
            hours = int(fields.hours)
            await self.validator.check_daily_limit(
                self.timesheet_store, user, day, hours
            )

            new_entry = NewTimesheetEntry(
                date=day,
                user=user,
                activity=fields.activity,
                issue=fields.issue.strip(),
                comment="",
                hours=hours,
                approval_status=ApprovalStatus.PENDING,
                created=now.replace(second=0, microsecond=0),
                unit=self.unit_label,
                author=user,
                project_id=project.id,
                project_name=project.name,
            )
            created = await self.timesheet_store.create(new_entry)
            logger.info(
                f"Logged {hours}h on {format_entry_date(day)} "
                f"as entry {created.id}"
            )
            return created

    async def _owned_pending_entry(
        self, entry_id: str, user: str, action: str
    ) -> TimesheetEntry:
        entry = await self.timesheet_store.get(entry_id)
        if entry.user != user:
            raise NotEntryOwnerError(entry_id, user)
        if entry.approval_status != ApprovalStatus.PENDING:
            raise ImmutableStateError(
                entry_id, entry.approval_status.value, action=action
            )
        return entry

    @log_function_call(level="DEBUG")
    async def edit(
        self, entry_id: str, user: str, fields: EntryFields
    ) -> TimesheetEntry:
        """Validate and apply changes to one of the user's Pending entries.

        The daily cap is checked without the entry's own current hours.

        Raises:
            SubmissionInProgressError: If a submission is already running
            EntryNotFoundError: If the entry or its project does not exist
            NotEntryOwnerError: If ``user`` does not own the entry
            ImmutableStateError: If the entry is Approved or Rejected
            ClosedWindowError: If no day can be logged on the project
            EntryValidationError: If any form field is invalid
            DailyLimitExceededError: If the day would exceed the hour cap
            ValidationUnavailableError: If the cap could not be checked
            StoreUnavailableError: If the write failed
        """
        with self._submission(), LogContext(user=user, entry_id=entry_id):
            entry = await self._owned_pending_entry(entry_id, user, "edit")
            project = await self.load_project(entry.project_name)
            window = await self._open_window(project, self.clock().date())
            self._validate_fields(fields, window)

            day = fields.parsed_date()
            hours = int(fields.hours)
            await self.validator.check_daily_limit(
                self.timesheet_store, user, day, hours, exclude_id=entry_id
            )

            updated = await self.timesheet_store.update(
                entry_id,
                {
                    "date": format_entry_date(day),
                    "activity": fields.activity,
                    "hours": hours,
                    "issue": fields.issue.strip(),
                },
            )
            logger.info(f"Edited entry {entry_id}")
            return updated

    async def delete(self, entry_id: str, user: str) -> None:
        """Delete one of the user's Pending entries.

        Raises:
            SubmissionInProgressError: If a submission is already running
            EntryNotFoundError: If the entry does not exist
            NotEntryOwnerError: If ``user`` does not own the entry
            ImmutableStateError: If the entry is Approved or Rejected
            StoreUnavailableError: If the delete failed
        """
        with self._submission(), LogContext(user=user, entry_id=entry_id):
            await self._owned_pending_entry(entry_id, user, "delete")
            await self.timesheet_store.delete(entry_id)
            logger.info(f"Deleted entry {entry_id}")
