"""Validator orchestrators for timesheet entries and projects.

``EntryValidator`` runs the field rules of the entry form and, as a
separate asynchronous step, the daily hour cap against the store.
``ProjectValidator`` checks the project form.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional

from timesheet_approval.calculators.entry_window import EntryWindow
from timesheet_approval.exceptions import (
    StoreUnavailableError,
    ValidationUnavailableError,
)
from timesheet_approval.models.project import Project
from timesheet_approval.models.timesheet import EntryFields
from timesheet_approval.services.stores import TimesheetStore
from timesheet_approval.validators.business_validators import (
    MAX_DAILY_HOURS,
    BusinessRuleValidators,
)
from timesheet_approval.validators.field_validators import FieldValidators
from timesheet_approval.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


class EntryValidator:
    """Validator for the timesheet entry form.

    Example:
        >>> validator = EntryValidator()
        >>> report = validator.validate(fields, window)
        >>> if not report.is_valid():
        ...     print(report.field_errors())
        >>> existing = await validator.check_daily_limit(store, user, day, 3)
    """

    def __init__(self, max_daily_hours: int = MAX_DAILY_HOURS) -> None:
        self.max_daily_hours = max_daily_hours

    def validate(
        self,
        fields: EntryFields,
        window: Optional[EntryWindow] = None,
    ) -> ValidationReport:
        """Validate every field of the entry form.

        Rules are evaluated independently so that all problems surface at
        once; within one field the first failing rule is reported.

        Args:
            fields: The submitted form values
            window: Resolved entry window of the project

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()

        FieldValidators.validate_entry_date(fields.date, window, report)
        FieldValidators.validate_activity(fields.activity, report)
        FieldValidators.validate_hours(fields.hours, report)
        FieldValidators.validate_issue(fields.issue, report)

        if not report.is_valid():
            logger.debug(f"Entry form invalid: {report.field_errors()}")

        return report

    async def check_daily_limit(
        self,
        store: TimesheetStore,
        user: str,
        date: dt.date,
        hours: int,
        exclude_id: Optional[str] = None,
    ) -> int:
        """Check the daily hour cap against the entries in the store.

        Args:
            store: Timesheet store to read existing entries from
            user: Owner email
            date: Day of the entry
            hours: Hours of the new or edited entry
            exclude_id: Id of the entry being edited, if any

        Returns:
            Hours already logged that day

        Raises:
            DailyLimitExceededError: If the cap would be exceeded
            ValidationUnavailableError: If the store could not be read
        """
        try:
            entries = await store.list()
        except StoreUnavailableError as e:
            logger.error(f"Daily hours check failed for {user} on {date}: {e}")
            raise ValidationUnavailableError(
                f"Error validating daily hours limit: {e.message}"
            ) from e

        return BusinessRuleValidators.check_daily_limit(
            entries,
            user,
            date,
            hours,
            exclude_id=exclude_id,
            limit=self.max_daily_hours,
        )


class ProjectValidator:
    """Validator for the project create/edit form."""

    def validate(
        self,
        name: Optional[str],
        code: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        today: dt.date,
        assigned_users: Optional[List[str]] = None,
        existing_projects: Optional[Iterable[Project]] = None,
        editing_id: Optional[str] = None,
    ) -> ValidationReport:
        """Validate a project form.

        Args:
            name: Project name
            code: Project code
            start_date: Start date (DD-MM-YYYY)
            end_date: End date (DD-MM-YYYY)
            today: The current day
            assigned_users: Users to assign
            existing_projects: Projects already stored, for the name check
            editing_id: Id of the project being edited; enables edit mode

        Returns:
            ValidationReport with any issues found
        """
        report = ValidationReport()

        FieldValidators.validate_required_text(name, "name", report, "Project name")
        FieldValidators.validate_required_text(code, "code", report, "Project code")

        if name and name.strip() and existing_projects is not None:
            for project in existing_projects:
                if project.id != editing_id and project.matches_name(name):
                    report.add_error(
                        "name", f"A project named '{project.name}' already exists", name
                    )
                    break

        BusinessRuleValidators.validate_project_schedule(
            start_date, end_date, today, report, is_edit=editing_id is not None
        )

        if not assigned_users:
            report.add_warning(
                "assigned_users", "No users are assigned to this project", []
            )

        return report
