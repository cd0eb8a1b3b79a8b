"""Field-level validators for the timesheet entry and project forms.

Each validator checks one field and records at most one error for it;
the first failing rule wins. Validators never raise.
"""

import datetime as dt
from numbers import Number
from typing import Any, Optional, Union

from timesheet_approval.calculators.business_calendar import is_weekend
from timesheet_approval.calculators.entry_window import EntryWindow
from timesheet_approval.exceptions import InvalidDateError
from timesheet_approval.models.timesheet import (
    MAX_ENTRY_HOURS,
    MIN_ENTRY_HOURS,
    Activity,
)
from timesheet_approval.utils.date_formats import (
    ENTRY_DATE_FORMAT,
    format_entry_date,
    parse_entry_date,
)
from timesheet_approval.validators.validation_report import ValidationReport

MIN_ISSUE_LENGTH = 10
MAX_ISSUE_LENGTH = 500

ACTIVITY_CHOICES = tuple(activity.value for activity in Activity)


class FieldValidators:
    """Collection of field-level validation methods."""

    @staticmethod
    def validate_entry_date(
        value: Optional[Union[dt.date, str]],
        window: Optional[EntryWindow],
        report: ValidationReport,
        field_name: str = "date",
    ) -> None:
        """Validate the day an entry is logged for.

        Args:
            value: The selected date, or the text typed when it did not parse
            window: Resolved entry window of the project, if known
            report: ValidationReport to collect issues
            field_name: Name of the field being validated
        """
        if value is None:
            report.add_error(field_name, "Date is required", None)
            return

        if isinstance(value, str):
            try:
                value = parse_entry_date(value)
            except InvalidDateError:
                report.add_error(
                    field_name, f"Date must be in {ENTRY_DATE_FORMAT} format", value
                )
                return

        if is_weekend(value):
            report.add_error(field_name, "Weekends are not allowed", value)
            return

        if window is not None and not window.contains(value):
            report.add_error(
                field_name,
                f"Date must be between {format_entry_date(window.min_date)} "
                f"and {format_entry_date(window.max_date)}",
                value,
            )

    @staticmethod
    def validate_activity(
        value: Optional[str],
        report: ValidationReport,
        field_name: str = "activity",
    ) -> None:
        """Validate that the activity is one of the fixed choices."""
        if value is None or (isinstance(value, str) and not value.strip()):
            report.add_error(field_name, "Activity is required", value)
            return

        if value not in ACTIVITY_CHOICES:
            report.add_error(
                field_name,
                f"Activity must be one of: {', '.join(ACTIVITY_CHOICES)}",
                value,
            )

    @staticmethod
    def validate_hours(
        value: Any,
        report: ValidationReport,
        field_name: str = "hours",
    ) -> None:
        """Validate hours: a whole number from 1 to 9.

        Numeric strings are not accepted; the form layer is expected to
        hand over numbers.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            report.add_error(field_name, "Hours is required", value)
            return

        if isinstance(value, bool) or not isinstance(value, Number):
            report.add_error(field_name, "Hours must be a number", value)
            return

        if value < MIN_ENTRY_HOURS:
            report.add_error(field_name, "Hours must be greater than 0", value)
        elif value > MAX_ENTRY_HOURS:
            report.add_error(
                field_name, f"Hours cannot exceed {MAX_ENTRY_HOURS}", value
            )
        elif value != int(value):
            report.add_error(field_name, "Hours must be a whole number", value)

    @staticmethod
    def validate_issue(
        value: Optional[str],
        report: ValidationReport,
        field_name: str = "issue",
    ) -> None:
        """Validate the issue description length after trimming."""
        text = value.strip() if isinstance(value, str) else ""

        if not text:
            report.add_error(field_name, "Issue description is required", value)
        elif len(text) < MIN_ISSUE_LENGTH:
            report.add_error(
                field_name,
                f"Issue description must be at least {MIN_ISSUE_LENGTH} characters",
                value,
            )
        elif len(text) > MAX_ISSUE_LENGTH:
            report.add_error(
                field_name,
                f"Issue description cannot exceed {MAX_ISSUE_LENGTH} characters",
                value,
            )

    @staticmethod
    def validate_required_text(
        value: Optional[str],
        field_name: str,
        report: ValidationReport,
        label: Optional[str] = None,
    ) -> None:
        """Validate that a text field is present and not whitespace only."""
        if value is None or not str(value).strip():
            report.add_error(field_name, f"{label or field_name} is required", value)
