"""Business rule validators spanning more than one field or record.

This module covers the daily hour cap, which looks at every entry a user
already logged on a day, and the project schedule rules applied when a
project is created or edited.
"""

import datetime as dt
import logging
from typing import Iterable, Optional

from timesheet_approval.exceptions import DailyLimitExceededError, InvalidDateError
from timesheet_approval.models.timesheet import ApprovalStatus, TimesheetEntry
from timesheet_approval.utils.date_formats import parse_project_date
from timesheet_approval.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)

MAX_DAILY_HOURS = 9
MIN_PROJECT_DURATION_DAYS = 30

# Rejected entries do not consume the user's daily allowance
_COUNTED_STATUSES = {ApprovalStatus.PENDING, ApprovalStatus.APPROVED}


class BusinessRuleValidators:
    """Collection of business rule validation methods."""

    @staticmethod
    def sum_daily_hours(
        entries: Iterable[TimesheetEntry],
        user: str,
        date: dt.date,
        exclude_id: Optional[str] = None,
    ) -> int:
        """Sum the hours a user has logged on one day.

        Args:
            entries: Entries to consider (usually the whole store)
            user: Owner email
            date: Day to sum
            exclude_id: Entry to leave out, e.g. the one being edited

        Returns:
            Total hours of the user's Pending and Approved entries that day
        """
        return sum(
            entry.hours
            for entry in entries
            if entry.user == user
            and entry.date == date
            and entry.id != exclude_id
            and entry.approval_status in _COUNTED_STATUSES
        )

    @staticmethod
    def check_daily_limit(
        entries: Iterable[TimesheetEntry],
        user: str,
        date: dt.date,
        hours: int,
        exclude_id: Optional[str] = None,
        limit: int = MAX_DAILY_HOURS,
    ) -> int:
        """Ensure a new or edited entry keeps the day within the cap.

        Args:
            entries: Entries already stored
            user: Owner email
            date: Day of the entry
            hours: Hours of the new or edited entry
            exclude_id: Id of the entry being edited, if any
            limit: Maximum hours per user per day

        Returns:
            Hours already logged that day (excluding ``exclude_id``)

        Raises:
            DailyLimitExceededError: If existing + hours exceeds the limit
        """
        existing = BusinessRuleValidators.sum_daily_hours(
            entries, user, date, exclude_id=exclude_id
        )
        attempted = existing + hours

        if attempted > limit:
            logger.info(
                f"Daily limit exceeded for {user} on {date}: "
                f"{existing} existing + {hours} new > {limit}"
            )
            raise DailyLimitExceededError(existing, attempted, limit)

        return existing

    @staticmethod
    def validate_project_schedule(
        start_date: Optional[str],
        end_date: Optional[str],
        today: dt.date,
        report: ValidationReport,
        is_edit: bool = False,
    ) -> None:
        """Validate a project's start and end dates.

        Rules:
        - both dates are required and must be valid DD-MM-YYYY dates
        - on creation the start date may not lie in the past
        - the end date must be after the start date
        - the project must run for at least 30 days

        Args:
            start_date: Start date string (DD-MM-YYYY)
            end_date: End date string (DD-MM-YYYY)
            today: The current day
            report: ValidationReport to collect issues
            is_edit: Edit mode skips the past-start rule
        """
        start = BusinessRuleValidators._parse_schedule_date(
            start_date, "start_date", "Start date", report
        )
        end = BusinessRuleValidators._parse_schedule_date(
            end_date, "end_date", "End date", report
        )

        if start is not None and not is_edit and start < today:
            report.add_error("start_date", "Start date cannot be in the past", start)

        if start is None or end is None:
            return

        if end <= start:
            report.add_error("end_date", "End date must be after start date", end)
        elif (end - start).days < MIN_PROJECT_DURATION_DAYS:
            report.add_error(
                "end_date",
                f"Project must run for at least {MIN_PROJECT_DURATION_DAYS} days",
                end,
            )

    @staticmethod
    def _parse_schedule_date(
        value: Optional[str],
        field_name: str,
        label: str,
        report: ValidationReport,
    ) -> Optional[dt.date]:
        if value is None or not value.strip():
            report.add_error(field_name, f"{label} is required", value)
            return None
        try:
            return parse_project_date(value)
        except InvalidDateError as e:
            report.add_error(field_name, e.message, value)
            return None
