"""Entry window resolution.

The entry window is the inclusive range of days on which a user may log
time for a project: no earlier than the project start or a few business
days back from today, and no later than today or the project end.
"""

import datetime as dt
import logging
from dataclasses import dataclass

from timesheet_approval.calculators.business_calendar import business_days_ago
from timesheet_approval.exceptions import ClosedWindowError
from timesheet_approval.models.project import Project
from timesheet_approval.utils.date_formats import parse_project_date

logger = logging.getLogger(__name__)

# Counted back from today, today excluded; together with today this is
# the "5 business days including today" the entry form advertises.
DEFAULT_BUSINESS_DAYS_BACK = 4


@dataclass(frozen=True)
class EntryWindow:
    """Inclusive range of loggable dates for one project.

    Attributes:
        project_name: Project the window belongs to
        min_date: Earliest loggable date
        max_date: Latest loggable date
    """

    project_name: str
    min_date: dt.date
    max_date: dt.date

    @property
    def is_open(self) -> bool:
        """Whether at least one day lies in the window."""
        return self.min_date <= self.max_date

    def contains(self, date: dt.date) -> bool:
        """Check whether a date lies inside the window (bounds included)."""
        return self.min_date <= date <= self.max_date

    def ensure_open(self) -> "EntryWindow":
        """Return the window, or raise if no day can be logged.

        Raises:
            ClosedWindowError: If min_date is after max_date
        """
        if not self.is_open:
            raise ClosedWindowError(self.project_name, self.min_date, self.max_date)
        return self


def resolve_entry_window(
    project: Project,
    today: dt.date,
    business_days_back: int = DEFAULT_BUSINESS_DAYS_BACK,
) -> EntryWindow:
    """Compute the entry window for a project as seen on ``today``.

    ``max_date = min(today, project end)`` and
    ``min_date = max(project start, business_days_ago(today, n))``.
    The window may come back closed; callers decide whether to raise
    via :meth:`EntryWindow.ensure_open`.

    Args:
        project: Project whose bounds apply
        today: The current day
        business_days_back: Weekdays to reach back from today

    Returns:
        EntryWindow for the project

    Raises:
        InvalidDateError: If a project bound is not a valid DD-MM-YYYY date
    """
    project_start = parse_project_date(project.start_date)
    project_end = parse_project_date(project.end_date)

    earliest = business_days_ago(today, business_days_back)

    window = EntryWindow(
        project_name=project.name,
        min_date=max(project_start, earliest),
        max_date=min(today, project_end),
    )

    logger.debug(
        f"Entry window for {project.name}: {window.min_date} to {window.max_date} "
        f"({'open' if window.is_open else 'closed'})"
    )
    return window
