"""Store interfaces the workflow depends on.

The workflow never talks to a transport directly. It consumes a
``TimesheetStore`` and a ``ProjectStore``; every call is asynchronous and
may fail with ``StoreUnavailableError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.models.timesheet import NewTimesheetEntry, TimesheetEntry


class TimesheetStore(ABC):
    """Create, read, update and delete timesheet records."""

    @abstractmethod
    async def list(self) -> List[TimesheetEntry]:
        """Return every stored entry."""

    @abstractmethod
    async def get(self, entry_id: str) -> TimesheetEntry:
        """Return one entry.

        Raises:
            EntryNotFoundError: If no entry has this id
        """

    @abstractmethod
    async def create(self, entry: NewTimesheetEntry) -> TimesheetEntry:
        """Store a new entry; the store assigns the id."""

    @abstractmethod
    async def update(self, entry_id: str, changes: Dict[str, Any]) -> TimesheetEntry:
        """Apply a partial update given as wire (camelCase) keys."""

    @abstractmethod
    async def delete(self, entry_id: str) -> None:
        """Remove an entry."""

    async def list_by_project(self, project_name: str) -> List[TimesheetEntry]:
        entries = await self.list()
        return [e for e in entries if e.project_name == project_name]

    async def list_by_user(self, user: str) -> List[TimesheetEntry]:
        entries = await self.list()
        return [e for e in entries if e.user == user]


class ProjectStore(ABC):
    """Read, create and update projects."""

    @abstractmethod
    async def list(self) -> List[Project]:
        """Return every project."""

    @abstractmethod
    async def create(self, project: NewProject) -> Project:
        """Store a new project; the store assigns the id."""

    @abstractmethod
    async def update(self, project: Project) -> Project:
        """Replace a stored project.

        Raises:
            EntryNotFoundError: If no project has this id
        """

    async def get_by_name(self, name: str) -> Optional[Project]:
        """Find a project by name, ignoring case; None if there is none."""
        for project in await self.list():
            if project.matches_name(name):
                return project
        return None

    async def list_for_user(self, email: str) -> List[Project]:
        """Projects the user is assigned to or manages."""
        return [p for p in await self.list() if p.includes_user(email)]
