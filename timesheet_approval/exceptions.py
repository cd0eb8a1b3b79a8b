"""Error taxonomy for the timesheet workflow.

Every error raised by the core carries a stable ``code`` and a
human-readable ``message``; most also carry a ``recovery_hint`` that the
presentation layer shows next to the message.
"""

import datetime as dt
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from timesheet_approval.validators.validation_report import ValidationReport


class TimesheetError(Exception):
    """Base exception for all timesheet workflow errors."""

    code = "TIMESHEET_ERROR"

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize the error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class EntryValidationError(TimesheetError):
    """Field-level validation failed; the report holds every issue found."""

    code = "VALIDATION_ERROR"

    def __init__(self, report: "ValidationReport", subject: str = "Timesheet entry"):
        self.report = report
        super().__init__(
            f"{subject} is invalid: {report.summary()}",
            recovery_hint="Correct the highlighted fields and submit again",
        )


class DailyLimitExceededError(TimesheetError):
    """Logging the entry would push the user's day over the hour cap."""

    code = "DAILY_LIMIT_EXCEEDED"

    def __init__(self, existing: int, attempted: int, limit: int):
        self.existing = existing
        self.attempted = attempted
        self.limit = limit
        super().__init__(
            f"Total hours for this day would be {attempted}. Maximum allowed is "
            f"{limit} hours per day. You already have {existing} hours logged.",
            recovery_hint="Reduce the hours or pick another day",
        )


class ValidationUnavailableError(TimesheetError):
    """The daily-hours check could not reach the store."""

    code = "VALIDATION_UNAVAILABLE"

    def __init__(self, message: str = "Error validating daily hours limit"):
        super().__init__(message, recovery_hint="Check the connection and retry")


class ClosedWindowError(TimesheetError):
    """The project's entry window contains no loggable day."""

    code = "CLOSED_WINDOW"

    def __init__(self, project_name: str, min_date: dt.date, max_date: dt.date):
        self.project_name = project_name
        self.min_date = min_date
        self.max_date = max_date
        super().__init__(
            f"Time can no longer be logged for project '{project_name}': "
            f"earliest allowed date {min_date:%d/%m/%Y} is after "
            f"latest allowed date {max_date:%d/%m/%Y}",
            recovery_hint="Ask the project manager to extend the project dates",
        )


class InvalidDateError(TimesheetError):
    """A date string did not match its expected wire format."""

    code = "INVALID_DATE"

    def __init__(self, value: object, expected_format: str):
        self.value = value
        self.expected_format = expected_format
        super().__init__(
            f"Invalid date {value!r}: expected format {expected_format}",
            recovery_hint="Fix the date in the project configuration",
        )


class ImmutableStateError(TimesheetError):
    """Attempted to change or delete an entry that is no longer Pending."""

    code = "IMMUTABLE_STATE"

    def __init__(self, entry_id: str, status: str, action: str = "change"):
        self.entry_id = entry_id
        self.status = status
        self.action = action
        super().__init__(
            f"Cannot {action} timesheet entry {entry_id}: it is already {status}"
        )


class EntryNotFoundError(TimesheetError):
    """Requested entry or project does not exist."""

    code = "NOT_FOUND"


class NotEntryOwnerError(TimesheetError):
    """The acting user does not own the entry."""

    code = "NOT_OWNER"

    def __init__(self, entry_id: str, user: str):
        self.entry_id = entry_id
        self.user = user
        super().__init__(f"User {user} does not own timesheet entry {entry_id}")


class SubmissionInProgressError(TimesheetError):
    """A second submit was attempted while the first one is still in flight."""

    code = "SUBMISSION_IN_PROGRESS"

    def __init__(self):
        super().__init__(
            "A submission is already in progress",
            recovery_hint="Wait for the current submission to finish",
        )


class StoreUnavailableError(TimesheetError):
    """A remote store call failed (network or server error)."""

    code = "STORE_UNAVAILABLE"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        recovery_hint: Optional[str] = "Retry in a moment",
    ):
        self.status_code = status_code
        super().__init__(message, recovery_hint=recovery_hint)


class PartialBulkFailureError(TimesheetError):
    """Some entries in a bulk operation failed; failed ones stay staged."""

    code = "PARTIAL_BULK_FAILURE"

    def __init__(self, action: str, succeeded: int, failed: Dict[str, Exception]):
        self.action = action
        self.succeeded = succeeded
        self.failed = failed
        super().__init__(
            f"{action.capitalize()} finished with errors: {succeeded} succeeded, "
            f"{len(failed)} failed ({', '.join(sorted(failed))})",
            recovery_hint="Failed entries are still staged; retry to apply them",
        )
