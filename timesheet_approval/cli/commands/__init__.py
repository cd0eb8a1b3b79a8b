"""CLI commands."""

from timesheet_approval.cli.commands.list import list_entries
from timesheet_approval.cli.commands.log_time import log_time
from timesheet_approval.cli.commands.own_entries import delete_entry, edit_entry
from timesheet_approval.cli.commands.projects import add_project, edit_project
from timesheet_approval.cli.commands.review import review_entries
from timesheet_approval.cli.commands.summary import summary
from timesheet_approval.cli.commands.window import show_window

__all__ = [
    "add_project",
    "delete_entry",
    "edit_entry",
    "edit_project",
    "list_entries",
    "log_time",
    "review_entries",
    "show_window",
    "summary",
]
