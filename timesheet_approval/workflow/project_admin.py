"""Creating and editing projects.

Every write is checked by ``ProjectValidator`` against the projects
already in the store before it reaches the store. A rejected form never
touches the store; warnings (such as a project nobody is assigned to) are
handed back with the stored project.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from timesheet_approval.exceptions import EntryNotFoundError, EntryValidationError
from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.services.stores import ProjectStore
from timesheet_approval.utils.date_formats import (
    format_project_date,
    parse_project_date,
)
from timesheet_approval.utils.logging_utils import LogContext, log_function_call
from timesheet_approval.validators.validation_report import ValidationIssue
from timesheet_approval.validators.validator import ProjectValidator

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "name",
        "code",
        "description",
        "status",
        "assigned_users",
        "start_date",
        "end_date",
        "project_manager",
    }
)


@dataclass
class ProjectSaveResult:
    """A stored project and the warnings its form produced."""

    project: Project
    warnings: List[ValidationIssue] = field(default_factory=list)


def _unique_users(users: Optional[Iterable[str]]) -> List[str]:
    # Keep the first spelling of each email
    seen = set()
    result = []
    for user in users or []:
        user = user.strip()
        if user and user.lower() not in seen:
            seen.add(user.lower())
            result.append(user)
    return result


def _normalize_date(value: str) -> str:
    return format_project_date(parse_project_date(value))


class ProjectAdminService:
    """Validated create and edit of projects.

    Attributes:
        project_store: Store the projects are read from and written to
        validator: Project form validator
        clock: Returns the current day

    Example:
        >>> service = ProjectAdminService(project_store)
        >>> result = await service.create(
        ...     "Apollo", "APL", "01-07-2024", "31-12-2024",
        ...     manager="pm@example.com", assigned_users=["ana@example.com"],
        ... )
        >>> result.project.status
        'Active'
    """

    def __init__(
        self,
        project_store: ProjectStore,
        validator: Optional[ProjectValidator] = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ):
        self.project_store = project_store
        self.validator = validator or ProjectValidator()
        self.clock = clock

    async def _check(
        self,
        values: Dict[str, Any],
        editing_id: Optional[str] = None,
    ) -> List[ValidationIssue]:
        existing = await self.project_store.list()
        report = self.validator.validate(
            values.get("name"),
            values.get("code"),
            values.get("start_date"),
            values.get("end_date"),
            self.clock(),
            assigned_users=values.get("assigned_users"),
            existing_projects=existing,
            editing_id=editing_id,
        )
        if not report.is_valid():
            raise EntryValidationError(report, subject="Project")
        for warning in report.get_warnings():
            logger.warning(f"Project '{values.get('name')}': {warning.message}")
        return report.get_warnings()

    @log_function_call(level="DEBUG")
    async def create(
        self,
        name: str,
        code: str,
        start_date: str,
        end_date: str,
        manager: str,
        assigned_users: Optional[Iterable[str]] = None,
        description: str = "",
    ) -> ProjectSaveResult:
        """Validate and store a new, Active project managed by ``manager``.

        Args:
            name: Project name, unique ignoring case
            code: Short project code
            start_date: First day (DD-MM-YYYY), not in the past
            end_date: Last day (DD-MM-YYYY), at least 30 days after the start
            manager: Email of the acting project manager
            assigned_users: Emails of users who may log time
            description: Free text description

        Returns:
            The stored project with any form warnings

        Raises:
            EntryValidationError: If any form field is invalid
            StoreUnavailableError: If the store could not be read or written
        """
        users = _unique_users(assigned_users)
        values = {
            "name": name,
            "code": code,
            "start_date": start_date,
            "end_date": end_date,
            "assigned_users": users,
        }
        with LogContext(user=manager, project=name):
            warnings = await self._check(values)

            new_project = NewProject(
                name=name.strip(),
                code=code.strip(),
                description=description.strip(),
                status="Active",
                assigned_users=users,
                start_date=_normalize_date(start_date),
                end_date=_normalize_date(end_date),
                project_manager=manager,
            )
            created = await self.project_store.create(new_project)
            logger.info(f"Created project {created.id} ({created.name})")
            return ProjectSaveResult(created, warnings)

    @log_function_call(level="DEBUG")
    async def update(
        self, project_name: str, changes: Dict[str, Any]
    ) -> ProjectSaveResult:
        """Validate and apply changes to an existing project.

        Edit mode allows a start date that already lies in the past; every
        other rule of the create form applies to the merged values.

        Args:
            project_name: Current name of the project
            changes: New values keyed by model field name

        Returns:
            The stored project with any form warnings

        Raises:
            ValueError: If ``changes`` names a field that cannot be edited
            EntryNotFoundError: If no project has that name
            EntryValidationError: If the merged form is invalid
            StoreUnavailableError: If the store could not be read or written
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit project fields: {sorted(unknown)}")

        with LogContext(project=project_name):
            current = await self.project_store.get_by_name(project_name)
            if current is None:
                raise EntryNotFoundError(f"Project '{project_name}' not found")

            values = {**current.model_dump(), **changes}
            if "assigned_users" in changes:
                values["assigned_users"] = _unique_users(changes["assigned_users"])
            warnings = await self._check(values, editing_id=current.id)

            updated = Project.model_validate(
                {
                    **values,
                    "name": values["name"].strip(),
                    "code": values["code"].strip(),
                    "start_date": _normalize_date(values["start_date"]),
                    "end_date": _normalize_date(values["end_date"]),
                }
            )
            stored = await self.project_store.update(updated)
            logger.info(f"Updated project {stored.id}: {sorted(changes)}")
            return ProjectSaveResult(stored, warnings)
