"""Tests for the in-memory stores."""

import asyncio

import pytest

from timesheet_approval.exceptions import EntryNotFoundError
from timesheet_approval.models.project import NewProject, Project
from timesheet_approval.models.timesheet import ApprovalStatus
from timesheet_approval.services.memory_store import (
    InMemoryProjectStore,
    InMemoryTimesheetStore,
)


class TestInMemoryTimesheetStore:
    """Tests for InMemoryTimesheetStore."""

    def test_create_assigns_sequential_ids(self, new_entry, make_entry):
        store = InMemoryTimesheetStore([make_entry("4")])

        created = asyncio.run(store.create(new_entry))

        assert created.id == "5"
        assert created.user == new_entry.user
        assert len(asyncio.run(store.list())) == 2

    def test_first_id_is_one(self, new_entry):
        assert asyncio.run(InMemoryTimesheetStore().create(new_entry)).id == "1"

    def test_get_returns_copy(self, make_entry):
        store = InMemoryTimesheetStore([make_entry("1")])

        entry = asyncio.run(store.get("1"))
        entry.comment = "changed locally"

        assert asyncio.run(store.get("1")).comment == ""

    def test_get_missing(self):
        with pytest.raises(EntryNotFoundError):
            asyncio.run(InMemoryTimesheetStore().get("99"))

    def test_update_with_wire_keys(self, make_entry):
        store = InMemoryTimesheetStore([make_entry("1")])

        updated = asyncio.run(
            store.update("1", {"approvalStatus": "Approved", "comment": "Reviewed"})
        )

        assert updated.approval_status == ApprovalStatus.APPROVED
        assert updated.comment == "Reviewed"
        assert asyncio.run(store.get("1")).approval_status == ApprovalStatus.APPROVED

    def test_update_missing(self):
        with pytest.raises(EntryNotFoundError):
            asyncio.run(InMemoryTimesheetStore().update("1", {"hours": 2}))

    def test_delete(self, make_entry):
        store = InMemoryTimesheetStore([make_entry("1"), make_entry("2")])

        asyncio.run(store.delete("1"))

        assert [e.id for e in asyncio.run(store.list())] == ["2"]
        with pytest.raises(EntryNotFoundError):
            asyncio.run(store.delete("1"))

    def test_list_by_project_and_user(self, make_entry):
        store = InMemoryTimesheetStore(
            [
                make_entry("1"),
                make_entry("2", project_name="Gemini"),
                make_entry("3", user="bob@example.com"),
            ]
        )

        assert [e.id for e in asyncio.run(store.list_by_project("Gemini"))] == ["2"]
        assert [e.id for e in asyncio.run(store.list_by_user("bob@example.com"))] == [
            "3"
        ]


class TestInMemoryProjectStore:
    """Tests for InMemoryProjectStore and the ProjectStore queries."""

    @pytest.fixture
    def store(self, project):
        other = Project(
            id="2",
            name="Gemini",
            start_date="01-01-2024",
            end_date="31-12-2024",
            project_manager="ana@example.com",
        )
        third = Project(id="3", name="Mercury", start_date="01-01-2024", end_date="31-12-2024")
        return InMemoryProjectStore([project, other, third])

    def test_get_by_name_ignores_case(self, store):
        assert asyncio.run(store.get_by_name("gemini")).id == "2"

    def test_get_by_name_missing(self, store):
        assert asyncio.run(store.get_by_name("Vostok")) is None

    def test_list_for_user(self, store):
        """Test projects where the user is assigned or manager are returned."""
        projects = asyncio.run(store.list_for_user("ana@example.com"))

        assert [p.name for p in projects] == ["Apollo", "Gemini"]

    def test_create_assigns_next_id(self, store):
        created = asyncio.run(
            store.create(
                NewProject(name="Vostok", start_date="01-07-2024", end_date="31-12-2024")
            )
        )

        assert created.id == "4"
        assert asyncio.run(store.get_by_name("vostok")).id == "4"

    def test_update_replaces_project(self, store, project):
        changed = project.model_copy(update={"end_date": "31-03-2025"})

        asyncio.run(store.update(changed))

        assert asyncio.run(store.get_by_name("Apollo")).end_date == "31-03-2025"
        assert len(asyncio.run(store.list())) == 3

    def test_update_missing(self, store):
        ghost = Project(id="9", name="Vostok", start_date="01-01-2024", end_date="31-12-2024")

        with pytest.raises(EntryNotFoundError, match="Project 9"):
            asyncio.run(store.update(ghost))
