"""Aggregators module for filtering and summarising timesheet entries.

This module provides the filtered entry list view and hours totals.
"""

from timesheet_approval.aggregators.entry_filter import (
    DateBucket,
    EntryFilter,
    FilterEngine,
    filter_entries,
    in_date_bucket,
    start_of_week,
)
from timesheet_approval.aggregators.hours_summary import (
    entries_to_frame,
    hours_matrix,
    total_hours,
    total_hours_by_project,
)

__all__ = [
    "DateBucket",
    "EntryFilter",
    "FilterEngine",
    "filter_entries",
    "in_date_bucket",
    "start_of_week",
    "entries_to_frame",
    "hours_matrix",
    "total_hours",
    "total_hours_by_project",
]
