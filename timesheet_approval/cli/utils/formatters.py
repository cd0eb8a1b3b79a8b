"""Output formatting utilities for CLI."""

from typing import Iterable, List, Sequence

import click
import pandas as pd

from timesheet_approval.models.timesheet import ApprovalStatus, TimesheetEntry
from timesheet_approval.utils.date_formats import format_entry_date
from timesheet_approval.workflow.approval_staging import PendingChange

STATUS_COLORS = {
    ApprovalStatus.PENDING: "yellow",
    ApprovalStatus.APPROVED: "green",
    ApprovalStatus.REJECTED: "red",
}

ENTRY_HEADERS = ["ID", "Date", "User", "Project", "Activity", "Hours", "Status"]


def format_success(message: str) -> str:
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    return click.style(f"ℹ {message}", fg="blue")


def format_status(status: ApprovalStatus) -> str:
    """Colour an approval status the way the review list shows it."""
    status = ApprovalStatus(status)
    return click.style(status.value, fg=STATUS_COLORS[status])


def _visible_width(cell: str) -> int:
    return len(click.unstyle(cell))


def _pad(cell: str, width: int) -> str:
    return cell + " " * (width - _visible_width(cell))


def format_table(
    headers: Sequence[str], rows: Iterable[Sequence[object]], max_width: int = 40
) -> str:
    """Format rows as a boxed text table.

    Cells may contain ANSI styling; widths are measured on the visible
    text. Unstyled cells longer than ``max_width`` are truncated.

    Args:
        headers: Column headers
        rows: Data rows
        max_width: Maximum width of a column

    Returns:
        The table as a single string, or "" when there are no headers
    """
    if not headers:
        return ""

    body: List[List[str]] = []
    for row in rows:
        cells = []
        for cell in list(row)[: len(headers)]:
            text = str(cell)
            if text == click.unstyle(text) and len(text) > max_width:
                text = text[: max_width - 1] + "…"
            cells.append(text)
        cells.extend([""] * (len(headers) - len(cells)))
        body.append(cells)

    widths = [
        max([len(header)] + [_visible_width(cells[i]) for cells in body])
        for i, header in enumerate(headers)
    ]

    rule = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def line(cells: Sequence[str]) -> str:
        padded = (_pad(cell, width) for cell, width in zip(cells, widths))
        return "| " + " | ".join(padded) + " |"

    lines = [rule, line(list(headers)), rule]
    if body:
        lines.extend(line(cells) for cells in body)
        lines.append(rule)
    return "\n".join(lines)


def entry_row(entry: TimesheetEntry) -> List[str]:
    return [
        entry.id,
        format_entry_date(entry.date),
        entry.user,
        entry.project_name,
        entry.activity.value,
        str(entry.hours),
        format_status(entry.approval_status),
    ]


def format_entries(entries: Iterable[TimesheetEntry]) -> str:
    return format_table(ENTRY_HEADERS, [entry_row(entry) for entry in entries])


def format_pending_changes(changes: Iterable[PendingChange]) -> str:
    """Render the confirmation table of staged status changes."""
    rows = [
        [
            change.entry.id,
            format_entry_date(change.entry.date),
            change.entry.user,
            change.entry.project_name,
            str(change.entry.hours),
            format_status(change.entry.approval_status),
            format_status(change.new_status),
        ]
        for change in changes
    ]
    return format_table(
        ["ID", "Date", "User", "Project", "Hours", "Current", "New"], rows
    )


def format_matrix(matrix: pd.DataFrame, corner: str = "User") -> str:
    """Render a DataFrame with its index as the first column."""
    if matrix.empty:
        return ""
    headers = [corner] + [str(column) for column in matrix.columns]
    rows = [
        [str(index)] + [str(value) for value in values]
        for index, values in zip(matrix.index, matrix.itertuples(index=False))
    ]
    return format_table(headers, rows)
