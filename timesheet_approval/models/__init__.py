"""Data models for the timesheet workflow.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- TimesheetEntry / NewTimesheetEntry: Stored and not-yet-stored entries
- EntryFields: Raw entry form payload
- Project / NewProject: Stored and not-yet-stored projects
"""

from timesheet_approval.models.base import BaseDataModel
from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.models.timesheet import (
    MAX_ENTRY_HOURS,
    MIN_ENTRY_HOURS,
    Activity,
    ApprovalStatus,
    EntryFields,
    NewTimesheetEntry,
    TimesheetEntry,
)

__all__ = [
    "BaseDataModel",
    "Activity",
    "ApprovalStatus",
    "EntryFields",
    "NewTimesheetEntry",
    "TimesheetEntry",
    "NewProject",
    "Project",
    "MIN_ENTRY_HOURS",
    "MAX_ENTRY_HOURS",
]
