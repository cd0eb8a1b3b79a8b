"""Calendar calculations for the timesheet workflow."""

from timesheet_approval.calculators.business_calendar import (
    business_days_ago,
    is_weekend,
)
from timesheet_approval.calculators.entry_window import (
    DEFAULT_BUSINESS_DAYS_BACK,
    EntryWindow,
    resolve_entry_window,
)

__all__ = [
    # business_calendar
    "business_days_ago",
    "is_weekend",
    # entry_window
    "DEFAULT_BUSINESS_DAYS_BACK",
    "EntryWindow",
    "resolve_entry_window",
]
