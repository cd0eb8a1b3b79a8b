"""Session-scoped review state.

The selection and the staged status changes are transient UI state. They
live in an explicit ``ReviewSession`` object owned by whoever drives the
review (a request handler, a CLI invocation), never in module globals.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from timesheet_approval.models.timesheet import ApprovalStatus


def _id_sort_key(entry_id: str):
    # Store ids are sequential numbers; keep numeric order where possible
    return (0, int(entry_id), "") if entry_id.isdigit() else (1, 0, entry_id)


@dataclass
class ReviewSession:
    """Selection set and pending status changes of one reviewer.

    Attributes:
        selection: Ids of the currently checked entries
        pending_changes: Proposed new status per entry id
    """

    selection: Set[str] = field(default_factory=set)
    pending_changes: Dict[str, ApprovalStatus] = field(default_factory=dict)

    def select(self, entry_id: str, selected: bool = True) -> None:
        if selected:
            self.selection.add(entry_id)
        else:
            self.selection.discard(entry_id)

    def select_all(self, entry_ids: Iterable[str]) -> None:
        self.selection.update(entry_ids)

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected_ids(self) -> List[str]:
        return sorted(self.selection, key=_id_sort_key)

    def is_selected(self, entry_id: str) -> bool:
        return entry_id in self.selection

    @property
    def has_pending_changes(self) -> bool:
        return bool(self.pending_changes)

    def reset(self) -> None:
        """Drop both the selection and every staged change."""
        self.selection.clear()
        self.pending_changes.clear()
