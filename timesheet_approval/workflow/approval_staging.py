"""Staged approval and rejection of timesheet entries.

A reviewer selects entries, stages a new status for them, reviews the
resulting list of real changes once, and commits. Only Pending entries
may change status; Approved and Rejected entries are final.

The commit issues one store update per entry, concurrently. There is no
transaction across those calls: when some of them fail the successful
ones stay applied, the failed ones stay staged for a retry, and the
caller gets a ``PartialBulkFailureError``.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from timesheet_approval.exceptions import (
    EntryNotFoundError,
    ImmutableStateError,
    PartialBulkFailureError,
    SubmissionInProgressError,
)
from timesheet_approval.models.timesheet import ApprovalStatus, TimesheetEntry
from timesheet_approval.services.stores import TimesheetStore
from timesheet_approval.utils.logging_utils import LogContext, generate_correlation_id
from timesheet_approval.workflow.session import ReviewSession

logger = logging.getLogger(__name__)

COMMENT_SEPARATOR = " | "


@dataclass(frozen=True)
class PendingChange:
    """A staged status change that differs from the entry's current status."""

    entry: TimesheetEntry
    new_status: ApprovalStatus


def append_comment(existing: str, note: str) -> str:
    """Append a reviewer note to an entry comment.

    Example:
        >>> append_comment("Worked on feature X", "Reviewed")
        'Worked on feature X | Reviewed'
        >>> append_comment("", "Reviewed")
        'Reviewed'
    """
    return f"{existing}{COMMENT_SEPARATOR}{note}" if existing else note


def check_transition(entry: TimesheetEntry, new_status: ApprovalStatus) -> None:
    """Ensure ``entry`` may move to ``new_status``.

    Staging the current status is allowed (it is a no-op). Any real change
    requires the entry to be Pending.

    Raises:
        ImmutableStateError: If the entry is Approved or Rejected
    """
    if entry.approval_status == new_status:
        return
    if entry.approval_status != ApprovalStatus.PENDING:
        raise ImmutableStateError(entry.id, entry.approval_status.value)


class ApprovalStagingEngine:
    """Select, stage and commit approval decisions against a store.

    The engine keeps a snapshot of the entries under review (see
    :meth:`refresh`) for staging decisions, and re-reads each entry from
    the store at commit time so that a change which became a no-op in the
    meantime is not applied twice.

    Example:
        >>> engine = ApprovalStagingEngine(store, ReviewSession())
        >>> await engine.refresh()
        >>> engine.select_all_visible(["1", "2", "3"])
        >>> engine.stage_bulk(engine.session.selected_ids(), ApprovalStatus.APPROVED)
        >>> [c.entry.id for c in engine.gather_pending()]
        ['1', '2', '3']
        >>> await engine.commit("Reviewed")
        3
    """

    def __init__(self, store: TimesheetStore, session: Optional[ReviewSession] = None):
        self.store = store
        self.session = session if session is not None else ReviewSession()
        self._entries: Dict[str, TimesheetEntry] = {}
        self._busy = False

    @property
    def entries(self) -> List[TimesheetEntry]:
        return list(self._entries.values())

    @property
    def is_committing(self) -> bool:
        return self._busy

    def load(self, entries: Iterable[TimesheetEntry]) -> None:
        """Replace the snapshot of entries under review."""
        self._entries = {entry.id: entry for entry in entries}

    async def refresh(self) -> List[TimesheetEntry]:
        """Reload the snapshot from the store."""
        self.load(await self.store.list())
        logger.debug(f"Loaded {len(self._entries)} entries for review")
        return self.entries

    def _get_entry(self, entry_id: str) -> TimesheetEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise EntryNotFoundError(f"Timesheet entry {entry_id} is not loaded")

    # Selection

    def select(self, entry_id: str, selected: bool = True) -> None:
        self.session.select(entry_id, selected)

    def select_all_visible(self, entry_ids: Iterable[str]) -> None:
        self.session.select_all(entry_ids)

    def clear(self) -> None:
        """Drop the selection and every staged change."""
        self.session.reset()

    # Staging

    def stage(self, entry_id: str, new_status: ApprovalStatus) -> None:
        """Record a proposed status for one entry; a later call wins.

        Raises:
            EntryNotFoundError: If the entry is not in the snapshot
            ImmutableStateError: If the entry is no longer Pending
        """
        new_status = ApprovalStatus(new_status)
        check_transition(self._get_entry(entry_id), new_status)
        self.session.pending_changes[entry_id] = new_status

    def stage_bulk(self, entry_ids: Iterable[str], new_status: ApprovalStatus) -> None:
        """Stage the same status for several entries, all or nothing.

        Every entry is checked before anything is staged. If any of them
        is not Pending the call raises and the pending changes are left
        untouched.

        Raises:
            EntryNotFoundError: If an entry is not in the snapshot
            ImmutableStateError: Naming every entry that cannot change
        """
        new_status = ApprovalStatus(new_status)
        entry_ids = list(entry_ids)
        blocked: List[Tuple[str, str]] = []

        for entry_id in entry_ids:
            try:
                check_transition(self._get_entry(entry_id), new_status)
            except ImmutableStateError as e:
                blocked.append((e.entry_id, e.status))

        if blocked:
            ids = ", ".join(entry_id for entry_id, _ in blocked)
            statuses = ", ".join(sorted({status for _, status in blocked}))
            raise ImmutableStateError(ids, statuses)

        for entry_id in entry_ids:
            self.session.pending_changes[entry_id] = new_status

    def unstage(self, entry_id: str) -> None:
        self.session.pending_changes.pop(entry_id, None)

    def gather_pending(self) -> List[PendingChange]:
        """List staged changes that would actually change an entry.

        Staged ids that are not in the snapshot, or whose staged status
        equals the current one, are left out.
        """
        changes = []
        for entry_id, new_status in self.session.pending_changes.items():
            entry = self._entries.get(entry_id)
            if entry is None or entry.approval_status == new_status:
                continue
            changes.append(PendingChange(entry=entry, new_status=new_status))
        return changes

    # Commit

    @contextlib.contextmanager
    def _exclusive(self):
        if self._busy:
            raise SubmissionInProgressError()
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    async def _apply_change(
        self, entry_id: str, new_status: ApprovalStatus, note: str
    ) -> Optional[TimesheetEntry]:
        current = await self.store.get(entry_id)
        if current.approval_status == new_status:
            return None
        check_transition(current, new_status)

        changes: Dict[str, Any] = {"approvalStatus": new_status.value}
        if note:
            changes["comment"] = append_comment(current.comment, note)
        return await self.store.update(entry_id, changes)

    async def _run_all(
        self,
        entry_ids: List[str],
        operation: Callable[[str], Awaitable[Any]],
    ) -> Tuple[Dict[str, Any], Dict[str, Exception]]:
        results = await asyncio.gather(
            *(operation(entry_id) for entry_id in entry_ids), return_exceptions=True
        )

        succeeded: Dict[str, Any] = {}
        failed: Dict[str, Exception] = {}
        for entry_id, result in zip(entry_ids, results):
            if isinstance(result, Exception):
                failed[entry_id] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                succeeded[entry_id] = result
        return succeeded, failed

    async def commit(self, comment: Optional[str] = None) -> int:
        """Apply every staged change that still differs from the store.

        Args:
            comment: Optional reviewer note appended to each changed
                entry's comment

        Returns:
            Number of entries whose status was changed

        Raises:
            SubmissionInProgressError: If another commit is running
            PartialBulkFailureError: If any store call failed; failed
                entries remain staged
        """
        with self._exclusive():
            staged = dict(self.session.pending_changes)
            if not staged:
                return 0

            note = comment.strip() if comment else ""
            entry_ids = list(staged)

            with LogContext(correlation_id=generate_correlation_id()):
                logger.info(f"Committing {len(entry_ids)} staged status change(s)")
                results, failed = await self._run_all(
                    entry_ids,
                    lambda entry_id: self._apply_change(
                        entry_id, staged[entry_id], note
                    ),
                )

                applied = 0
                for entry_id, updated in results.items():
                    # Leave the entry staged if it was re-staged meanwhile
                    if self.session.pending_changes.get(entry_id) == staged[entry_id]:
                        del self.session.pending_changes[entry_id]
                    if updated is None:
                        continue
                    applied += 1
                    self._entries[entry_id] = updated
                    self.session.selection.discard(entry_id)

                if failed:
                    for entry_id, error in failed.items():
                        logger.warning(f"Status change of {entry_id} failed: {error}")
                    raise PartialBulkFailureError("commit", applied, failed)

                logger.info(f"Committed {applied} status change(s)")
                return applied

    async def _delete_one(self, entry_id: str) -> None:
        current = await self.store.get(entry_id)
        if current.approval_status != ApprovalStatus.PENDING:
            raise ImmutableStateError(
                entry_id, current.approval_status.value, action="delete"
            )
        await self.store.delete(entry_id)

    async def delete_selected(self) -> int:
        """Delete every selected entry that is still Pending.

        Returns:
            Number of entries deleted

        Raises:
            SubmissionInProgressError: If another bulk operation is running
            PartialBulkFailureError: If any entry could not be deleted,
                including entries that are Approved or Rejected
        """
        with self._exclusive():
            entry_ids = self.session.selected_ids()
            if not entry_ids:
                return 0

            deleted, failed = await self._run_all(entry_ids, self._delete_one)

            for entry_id in deleted:
                self._entries.pop(entry_id, None)
                self.session.selection.discard(entry_id)
                self.session.pending_changes.pop(entry_id, None)

            if failed:
                raise PartialBulkFailureError("delete", len(deleted), failed)

            logger.info(f"Deleted {len(deleted)} entries")
            return len(deleted)
