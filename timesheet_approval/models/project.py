"""Project data model.

This module defines the Project model, which carries the date bounds and
membership that constrain where a user may log time, and NewProject, the
same record before the store has assigned an id.
"""

from typing import Any, List

from pydantic import Field, field_validator

from timesheet_approval.models.base import BaseDataModel


class NewProject(BaseDataModel):
    """A project that has not been stored yet.

    ``start_date`` and ``end_date`` are kept as the raw ``DD-MM-YYYY``
    strings from the store. They are parsed explicitly where a window is
    resolved, so a malformed value surfaces as an INVALID_DATE error at
    that point instead of making the project unreadable.

    Attributes:
        name: Project name (unique, compared case-insensitively)
        code: Short project code
        description: Free text description
        status: Lifecycle label, e.g. "Active"
        assigned_users: Emails of users who may log time
        start_date: First day of the project (DD-MM-YYYY)
        end_date: Last day of the project (DD-MM-YYYY)
        project_manager: Email of the project manager
    """

    name: str = Field(..., min_length=1)
    code: str = ""
    description: str = ""
    status: str = "Active"
    assigned_users: List[str] = Field(default_factory=list)
    start_date: str
    end_date: str
    project_manager: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are empty or whitespace only."""
        if not v.strip():
            raise ValueError("name cannot be empty or whitespace")
        return v.strip()

    def matches_name(self, name: str) -> bool:
        """Check whether ``name`` refers to this project (case-insensitive)."""
        return self.name.lower() == name.strip().lower()

    def includes_user(self, email: str) -> bool:
        """Check whether a user is assigned to or manages the project."""
        email = email.lower()
        return email == self.project_manager.lower() or any(
            email == user.lower() for user in self.assigned_users
        )


class Project(NewProject):
    """Represents a project as stored in the project store.

    Attributes:
        id: Store-assigned identifier

    Example:
        >>> project = Project.model_validate({
        ...     "id": "1",
        ...     "name": "Apollo",
        ...     "code": "APL",
        ...     "startDate": "01-06-2024",
        ...     "endDate": "31-12-2024",
        ...     "assignedUsers": ["ana@example.com"],
        ...     "projectManager": "pm@example.com",
        ... })
        >>> project.includes_user("PM@example.com")
        True
    """

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v
