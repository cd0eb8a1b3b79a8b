"""Error handling for CLI commands.

Every ``TimesheetError`` is shown as a coloured title and message, an
optional hint, and mapped to its own exit code. Nothing is swallowed:
unexpected exceptions exit with 255 and can show their traceback.
"""

import sys
import traceback
from typing import Dict, Tuple

import click
from pydantic import ValidationError

from timesheet_approval.cli.utils.formatters import (
    format_error,
    format_info,
    format_warning,
)
from timesheet_approval.exceptions import (
    DailyLimitExceededError,
    EntryValidationError,
    PartialBulkFailureError,
    TimesheetError,
)

CONFIGURATION_EXIT_CODE = 1
UNEXPECTED_EXIT_CODE = 255
CANCELLED_EXIT_CODE = 130

# code -> (title, exit code)
ERROR_TITLES: Dict[str, Tuple[str, int]] = {
    "VALIDATION_ERROR": ("Validation Error", 3),
    "DAILY_LIMIT_EXCEEDED": ("Daily Limit Exceeded", 4),
    "VALIDATION_UNAVAILABLE": ("Validation Unavailable", 5),
    "CLOSED_WINDOW": ("Project Closed", 6),
    "INVALID_DATE": ("Invalid Project Date", 7),
    "IMMUTABLE_STATE": ("Entry Locked", 8),
    "NOT_FOUND": ("Not Found", 9),
    "NOT_OWNER": ("Not Your Entry", 10),
    "SUBMISSION_IN_PROGRESS": ("Busy", 11),
    "STORE_UNAVAILABLE": ("Server Unavailable", 12),
    "PARTIAL_BULK_FAILURE": ("Partial Failure", 13),
}
DEFAULT_TITLE = ("Error", 14)


def _echo_details(error: TimesheetError) -> None:
    if isinstance(error, EntryValidationError):
        for field, message in error.report.field_errors().items():
            click.echo(f"  - {field}: {message}")
    elif isinstance(error, DailyLimitExceededError):
        click.echo(
            format_info(
                f"Already logged: {error.existing}h, "
                f"would total: {error.attempted}h, limit: {error.limit}h"
            )
        )
    elif isinstance(error, PartialBulkFailureError):
        for entry_id, cause in sorted(error.failed.items()):
            click.echo(f"  - {entry_id}: {cause}")


def handle_cli_error(error: BaseException, debug: bool = False) -> int:
    """
    Report an error to the user and pick the exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace of unexpected errors

    Returns:
        Process exit code
    """
    if isinstance(error, TimesheetError):
        title, exit_code = ERROR_TITLES.get(error.code, DEFAULT_TITLE)
        click.echo(format_error(f"{title}: {error.message}"))
        _echo_details(error)
        if error.recovery_hint:
            click.echo(format_warning(f"Hint: {error.recovery_hint}"))
        return exit_code

    if isinstance(error, ValidationError):
        click.echo(format_error(f"Configuration Error: {error}"))
        click.echo(format_warning("Hint: Check the values in your .env file"))
        return CONFIGURATION_EXIT_CODE

    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return CANCELLED_EXIT_CODE

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))
    if debug:
        click.echo("\nFull stack trace:")
        click.echo(
            "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        )
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))
    return UNEXPECTED_EXIT_CODE


class with_error_handling:
    """
    Context manager that turns errors raised by a command into an exit code.

    Click's own usage errors pass through untouched.

    Example:
        @click.command()
        @click.pass_context
        def my_command(ctx):
            with with_error_handling(ctx.obj["debug"]):
                ...
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not isinstance(exc_val, Exception):
            return False
        if isinstance(exc_val, click.ClickException):
            return False
        sys.exit(handle_cli_error(exc_val, self.debug))
