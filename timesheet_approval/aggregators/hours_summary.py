"""Hours totals over timesheet entries.

Totals per project (optionally for one user) and a user by project
matrix, built with pandas for the summary views.
"""

import logging
from typing import Dict, Iterable, Optional

import pandas as pd

from timesheet_approval.models.timesheet import TimesheetEntry

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["id", "date", "user", "project", "activity", "status", "unit", "hours"]


def entries_to_frame(entries: Iterable[TimesheetEntry]) -> pd.DataFrame:
    """Flatten entries into a DataFrame with one row per entry.

    Example:
        >>> df = entries_to_frame(entries)
        >>> list(df.columns)
        ['id', 'date', 'user', 'project', 'activity', 'status', 'unit', 'hours']
    """
    rows = [
        {
            "id": entry.id,
            "date": entry.date,
            "user": entry.user,
            "project": entry.project_name,
            "activity": entry.activity.value,
            "status": entry.approval_status.value,
            "unit": entry.unit,
            "hours": entry.hours,
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def total_hours(entries: Iterable[TimesheetEntry]) -> int:
    return sum(entry.hours for entry in entries)


def total_hours_by_project(
    entries: Iterable[TimesheetEntry], user: Optional[str] = None
) -> Dict[str, int]:
    """Sum hours per project name.

    Args:
        entries: Entries to sum
        user: Only count this user's entries (case-insensitive)

    Returns:
        Mapping of project name to total hours, sorted by project name
    """
    df = entries_to_frame(entries)
    if user is not None:
        df = df[df["user"].str.lower() == user.lower()]
    if df.empty:
        return {}

    totals = df.groupby("project")["hours"].sum().sort_index()
    return {project: int(hours) for project, hours in totals.items()}


def hours_matrix(entries: Iterable[TimesheetEntry]) -> pd.DataFrame:
    """Build a user by project matrix of logged hours.

    Users are rows, projects are columns; combinations without entries
    hold 0.

    Example:
        >>> matrix = hours_matrix(entries)
        >>> matrix.loc["ana@example.com", "Apollo"]
        12
    """
    df = entries_to_frame(entries)
    if df.empty:
        logger.info("No entries, returning empty hours matrix")
        return pd.DataFrame()

    matrix = df.pivot_table(
        index="user",
        columns="project",
        values="hours",
        aggfunc="sum",
        fill_value=0,
    )
    matrix.columns.name = None
    matrix.index.name = None

    logger.info(
        f"Generated hours matrix with {len(matrix)} users and "
        f"{len(matrix.columns)} projects"
    )
    return matrix
