"""Filtering of timesheet entry lists.

Filters are independent predicates that are all required to match. Date
buckets are computed relative to the current day with naive calendar
boundaries; weeks start on Sunday.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

from timesheet_approval.models.timesheet import (
    Activity,
    ApprovalStatus,
    TimesheetEntry,
)
from timesheet_approval.workflow.session import ReviewSession

logger = logging.getLogger(__name__)


class DateBucket(str, Enum):
    """Relative date ranges offered by the entry list filter."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this-week"
    LAST_WEEK = "last-week"
    THIS_MONTH = "this-month"


def start_of_week(day: dt.date) -> dt.date:
    """Return the Sunday on or before ``day``.

    Example:
        >>> start_of_week(dt.date(2024, 6, 12))  # Wednesday
        datetime.date(2024, 6, 9)
    """
    # weekday(): Monday=0 .. Sunday=6
    return day - dt.timedelta(days=(day.weekday() + 1) % 7)


def in_date_bucket(day: dt.date, bucket: DateBucket, today: dt.date) -> bool:
    """Check whether ``day`` falls in ``bucket`` as seen from ``today``."""
    bucket = DateBucket(bucket)

    if bucket == DateBucket.TODAY:
        return day == today
    if bucket == DateBucket.YESTERDAY:
        return day == today - dt.timedelta(days=1)
    if bucket == DateBucket.THIS_WEEK:
        week_start = start_of_week(today)
        return week_start <= day <= week_start + dt.timedelta(days=6)
    if bucket == DateBucket.LAST_WEEK:
        week_start = start_of_week(today) - dt.timedelta(days=7)
        return week_start <= day <= week_start + dt.timedelta(days=6)
    return day.year == today.year and day.month == today.month


@dataclass(frozen=True)
class EntryFilter:
    """A set of active filters; ``None`` means the filter is off.

    Attributes:
        date_bucket: Relative date range
        status: Approval status
        activity: Activity type
        user: Owner email (case-insensitive)
        unit: Unit label
        project: Project name (case-insensitive)
    """

    date_bucket: Optional[DateBucket] = None
    status: Optional[ApprovalStatus] = None
    activity: Optional[Activity] = None
    user: Optional[str] = None
    unit: Optional[str] = None
    project: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.date_bucket,
                self.status,
                self.activity,
                self.user,
                self.unit,
                self.project,
            )
        )

    def matches(self, entry: TimesheetEntry, today: dt.date) -> bool:
        if self.date_bucket is not None and not in_date_bucket(
            entry.date, self.date_bucket, today
        ):
            return False
        if self.status is not None and entry.approval_status != self.status:
            return False
        if self.activity is not None and entry.activity != self.activity:
            return False
        if self.user is not None and entry.user.lower() != self.user.lower():
            return False
        if self.unit is not None and entry.unit != self.unit:
            return False
        if (
            self.project is not None
            and entry.project_name.lower() != self.project.lower()
        ):
            return False
        return True


def filter_entries(
    entries: Iterable[TimesheetEntry], criteria: EntryFilter, today: dt.date
) -> List[TimesheetEntry]:
    """Return the entries matching every active filter, in input order."""
    return [entry for entry in entries if criteria.matches(entry, today)]


class FilterEngine:
    """Filtered view over an entry list.

    Every change of the filter set recomputes the view from the full
    list and clears the row selection of the attached review session.

    Example:
        >>> engine = FilterEngine(entries, session)
        >>> engine.apply(EntryFilter(status=ApprovalStatus.APPROVED,
        ...                          date_bucket=DateBucket.THIS_WEEK))
        >>> engine.clear()
    """

    def __init__(
        self,
        entries: Iterable[TimesheetEntry] = (),
        session: Optional[ReviewSession] = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ):
        self.session = session if session is not None else ReviewSession()
        self.clock = clock
        self._all: List[TimesheetEntry] = list(entries)
        self._criteria = EntryFilter()
        self._visible: List[TimesheetEntry] = list(self._all)

    @property
    def criteria(self) -> EntryFilter:
        return self._criteria

    @property
    def visible(self) -> List[TimesheetEntry]:
        return list(self._visible)

    def visible_ids(self) -> List[str]:
        return [entry.id for entry in self._visible]

    def total_hours(self) -> int:
        return sum(entry.hours for entry in self._visible)

    def _recompute(self) -> None:
        self._visible = filter_entries(self._all, self._criteria, self.clock())
        self.session.clear_selection()
        logger.debug(
            f"Filter matched {len(self._visible)} of {len(self._all)} entries"
        )

    def set_entries(self, entries: Iterable[TimesheetEntry]) -> None:
        """Replace the full list, keeping the current filters."""
        self._all = list(entries)
        self._recompute()

    def apply(self, criteria: EntryFilter) -> List[TimesheetEntry]:
        self._criteria = criteria
        self._recompute()
        return self.visible

    def clear(self) -> List[TimesheetEntry]:
        return self.apply(EntryFilter())
