"""Approve or reject timesheet entries."""

from typing import Optional, Tuple

import click

from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import (
    format_info,
    format_pending_changes,
    format_success,
)
from timesheet_approval.cli.utils.runtime import build_stores, run_async
from timesheet_approval.config.settings import get_config
from timesheet_approval.models.timesheet import ApprovalStatus
from timesheet_approval.workflow.approval_staging import ApprovalStagingEngine

ACTIONS = {
    "approve": ApprovalStatus.APPROVED,
    "reject": ApprovalStatus.REJECTED,
}


@click.command(name="review")
@click.argument("action", type=click.Choice(sorted(ACTIONS)))
@click.argument("entry_ids", nargs=-1, required=True)
@click.option("--comment", default=None, help="Note appended to each entry")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def review_entries(
    ctx: click.Context,
    action: str,
    entry_ids: Tuple[str, ...],
    comment: Optional[str],
    yes: bool,
):
    """Approve or reject the Pending entries ENTRY_IDS.

    The changes are shown once for confirmation and then applied
    together.

    Example:
        timesheet-cli review approve 3 4 7 --comment "Reviewed"
    """
    with with_error_handling(ctx.obj["debug"]):
        timesheet_store, _ = build_stores(get_config())
        engine = ApprovalStagingEngine(timesheet_store)
        run_async(engine.refresh())

        engine.select_all_visible(entry_ids)
        engine.stage_bulk(engine.session.selected_ids(), ACTIONS[action])

        changes = engine.gather_pending()
        if not changes:
            click.echo(
                format_info("Nothing to change: entries already have that status")
            )
            return

        click.echo(format_pending_changes(changes))
        if not yes:
            click.confirm(f"Apply {len(changes)} change(s)?", abort=True)

        applied = run_async(engine.commit(comment))
        noun = "entry" if applied == 1 else "entries"
        click.echo(format_success(f"Updated {applied} {noun}"))
