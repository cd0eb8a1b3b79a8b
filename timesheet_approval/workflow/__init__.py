"""Review, submission and project admin workflows over the stores."""

from timesheet_approval.workflow.approval_staging import (
    COMMENT_SEPARATOR,
    ApprovalStagingEngine,
    PendingChange,
    append_comment,
    check_transition,
)
from timesheet_approval.workflow.entry_submission import (
    DEFAULT_UNIT,
    EntrySubmissionService,
)
from timesheet_approval.workflow.project_admin import (
    ProjectAdminService,
    ProjectSaveResult,
)
from timesheet_approval.workflow.session import ReviewSession

__all__ = [
    "COMMENT_SEPARATOR",
    "ApprovalStagingEngine",
    "PendingChange",
    "append_comment",
    "check_transition",
    "DEFAULT_UNIT",
    "EntrySubmissionService",
    "ProjectAdminService",
    "ProjectSaveResult",
    "ReviewSession",
]
