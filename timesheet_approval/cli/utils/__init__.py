"""CLI utility functions."""

from timesheet_approval.cli.utils.formatters import (
    format_entries,
    format_error,
    format_info,
    format_matrix,
    format_pending_changes,
    format_status,
    format_success,
    format_table,
    format_warning,
)
from timesheet_approval.cli.utils.params import ENTRY_DATE, EntryDate
from timesheet_approval.cli.utils.runtime import (
    build_stores,
    build_submission_service,
    run_async,
)

__all__ = [
    "format_entries",
    "format_error",
    "format_info",
    "format_matrix",
    "format_pending_changes",
    "format_status",
    "format_success",
    "format_table",
    "format_warning",
    "ENTRY_DATE",
    "EntryDate",
    "build_stores",
    "build_submission_service",
    "run_async",
]
