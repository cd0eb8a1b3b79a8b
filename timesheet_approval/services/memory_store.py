"""In-process store implementations.

These keep records in dictionaries and behave like the REST store
(sequential ids, partial updates, copies handed out rather than shared
references). They serve as test doubles for the workflow.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from timesheet_approval.exceptions import EntryNotFoundError
from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.models.timesheet import NewTimesheetEntry, TimesheetEntry
from timesheet_approval.services.stores import ProjectStore, TimesheetStore

logger = logging.getLogger(__name__)


class InMemoryTimesheetStore(TimesheetStore):
    """Timesheet store holding entries in memory.

    Example:
        >>> store = InMemoryTimesheetStore()
        >>> created = asyncio.run(store.create(new_entry))
        >>> created.id
        '1'
    """

    def __init__(self, entries: Optional[Iterable[TimesheetEntry]] = None):
        self._entries: Dict[str, TimesheetEntry] = {}
        for entry in entries or []:
            self._entries[entry.id] = entry.model_copy()

    def _next_id(self) -> str:
        numeric_ids = [int(i) for i in self._entries if i.isdigit()]
        return str(max(numeric_ids, default=0) + 1)

    async def list(self) -> List[TimesheetEntry]:
        return [entry.model_copy() for entry in self._entries.values()]

    async def get(self, entry_id: str) -> TimesheetEntry:
        try:
            return self._entries[entry_id].model_copy()
        except KeyError:
            raise EntryNotFoundError(f"Timesheet entry {entry_id} not found")

    async def create(self, entry: NewTimesheetEntry) -> TimesheetEntry:
        entry_id = self._next_id()
        stored = TimesheetEntry.model_validate({**entry.to_wire(), "id": entry_id})
        self._entries[entry_id] = stored
        logger.debug(f"Created timesheet entry {entry_id}")
        return stored.model_copy()

    async def update(self, entry_id: str, changes: Dict[str, Any]) -> TimesheetEntry:
        current = await self.get(entry_id)
        merged = {**current.to_wire(), **changes, "id": entry_id}
        updated = TimesheetEntry.model_validate(merged)
        self._entries[entry_id] = updated
        logger.debug(f"Updated timesheet entry {entry_id}: {sorted(changes)}")
        return updated.model_copy()

    async def delete(self, entry_id: str) -> None:
        if entry_id not in self._entries:
            raise EntryNotFoundError(f"Timesheet entry {entry_id} not found")
        del self._entries[entry_id]
        logger.debug(f"Deleted timesheet entry {entry_id}")


class InMemoryProjectStore(ProjectStore):
    """Project store holding projects in memory."""

    def __init__(self, projects: Optional[Iterable[Project]] = None):
        self._projects: List[Project] = [p.model_copy() for p in projects or []]

    async def list(self) -> List[Project]:
        return [project.model_copy() for project in self._projects]

    async def create(self, project: NewProject) -> Project:
        numeric_ids = [int(p.id) for p in self._projects if p.id.isdigit()]
        project_id = str(max(numeric_ids, default=0) + 1)
        stored = Project.model_validate({**project.to_wire(), "id": project_id})
        self._projects.append(stored)
        logger.debug(f"Created project {project_id} ({stored.name})")
        return stored.model_copy()

    async def update(self, project: Project) -> Project:
        for index, current in enumerate(self._projects):
            if current.id == project.id:
                self._projects[index] = project.model_copy()
                logger.debug(f"Updated project {project.id}")
                return project.model_copy()
        raise EntryNotFoundError(f"Project {project.id} not found")
