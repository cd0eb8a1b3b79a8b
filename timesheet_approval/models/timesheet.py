"""Timesheet data models.

This module defines the TimesheetEntry model, which represents one logged
work record of a user on a project, together with the raw form payload
submitted by the presentation layer.
"""

import datetime as dt
from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, field_serializer, field_validator

from timesheet_approval.exceptions import InvalidDateError
from timesheet_approval.models.base import BaseDataModel
from timesheet_approval.utils.date_formats import (
    format_created,
    format_entry_date,
    parse_created,
    parse_entry_date,
)

MIN_ENTRY_HOURS = 1
MAX_ENTRY_HOURS = 9


class ApprovalStatus(str, Enum):
    """Approval state of a timesheet entry."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Activity(str, Enum):
    """Kind of work an entry is logged for."""

    TASK = "Task"
    HOLIDAY = "Holiday"
    LEAVE = "Leave"
    INTERVIEW = "Interview"


class NewTimesheetEntry(BaseDataModel):
    """A timesheet record that has not been stored yet.

    Attributes:
        date: Day the work was done (wire format DD/MM/YYYY)
        user: Owner's email
        activity: Activity type
        issue: Description of the work
        comment: Reviewer comments, appended on approval/rejection
        hours: Whole hours, 1 to 9
        approval_status: Current approval state
        created: Submission timestamp (wire format DD/MM/YYYY hh:mm AM/PM)
        unit: Organisational unit label
        author: Email of whoever created the record
        project_id: Store id of the project
        project_name: Name of the project

    Example:
        >>> entry = NewTimesheetEntry.model_validate({
        ...     "date": "10/06/2024",
        ...     "user": "ana@example.com",
        ...     "activity": "Task",
        ...     "issue": "Implemented login form",
        ...     "hours": 4,
        ...     "approvalStatus": "Pending",
        ...     "created": "10/06/2024 05:30 PM",
        ...     "unit": "Unit 2",
        ...     "author": "ana@example.com",
        ...     "projectId": "1",
        ...     "projectName": "Apollo",
        ... })
        >>> entry.date
        datetime.date(2024, 6, 10)
    """

    date: dt.date
    user: str = Field(..., min_length=1)
    activity: Activity
    issue: str = ""
    comment: str = ""
    hours: int = Field(..., ge=MIN_ENTRY_HOURS, le=MAX_ENTRY_HOURS)
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    created: dt.datetime
    unit: str = ""
    author: str = ""
    project_id: str = ""
    project_name: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        """Accept the store's DD/MM/YYYY strings as well as date objects."""
        if isinstance(v, str):
            try:
                return parse_entry_date(v)
            except InvalidDateError as e:
                raise ValueError(str(e))
        return v

    @field_validator("created", mode="before")
    @classmethod
    def parse_created_timestamp(cls, v: Any) -> Any:
        """Accept the store's 12-hour timestamp strings."""
        if isinstance(v, str):
            try:
                return parse_created(v)
            except InvalidDateError as e:
                raise ValueError(str(e))
        return v

    @field_validator("project_id", mode="before")
    @classmethod
    def coerce_project_id(cls, v: Any) -> Any:
        """Project ids may arrive as numbers from older store data."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_serializer("date")
    def serialize_date(self, value: dt.date) -> str:
        return format_entry_date(value)

    @field_serializer("created")
    def serialize_created(self, value: dt.datetime) -> str:
        return format_created(value)


class TimesheetEntry(NewTimesheetEntry):
    """A stored timesheet record with its store-assigned id."""

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def is_pending(self) -> bool:
        return self.approval_status == ApprovalStatus.PENDING


class EntryFields(BaseDataModel):
    """Raw entry form payload.

    Every field is optional and loosely typed: the form may be submitted
    incomplete, and it is the validator's job (not the model's) to report
    what is wrong with it.
    """

    date: Optional[Union[dt.date, str]] = None
    activity: Optional[str] = None
    hours: Optional[Any] = None
    issue: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            if not v.strip():
                return None
            try:
                return parse_entry_date(v)
            except InvalidDateError:
                # Kept as typed; the validator reports it against the field
                return v.strip()
        return v

    def parsed_date(self) -> Optional[dt.date]:
        """The form date as a ``date``.

        Raises:
            InvalidDateError: If the date was typed in a wrong format
        """
        if isinstance(self.date, str):
            return parse_entry_date(self.date)
        return self.date

    @classmethod
    def from_entry(cls, entry: TimesheetEntry) -> "EntryFields":
        """Prefill the form from a stored entry, as the edit dialog does."""
        return cls(
            date=entry.date,
            activity=entry.activity.value,
            hours=entry.hours,
            issue=entry.issue,
        )
