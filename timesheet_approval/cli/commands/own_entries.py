"""Edit or delete a user's own Pending entry."""

import datetime as dt
from typing import Optional

import click

from timesheet_approval.cli.commands.log_time import ACTIVITY_NAMES
from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import format_info, format_success
from timesheet_approval.cli.utils.params import ENTRY_DATE
from timesheet_approval.cli.utils.runtime import (
    build_stores,
    build_submission_service,
    run_async,
)
from timesheet_approval.config.settings import get_config
from timesheet_approval.models.timesheet import EntryFields


@click.command(name="edit-entry")
@click.argument("entry_id")
@click.option("--user", required=True, help="Email of the entry's owner")
@click.option("--date", "day", type=ENTRY_DATE, default=None, help="New day")
@click.option("--activity", type=click.Choice(ACTIVITY_NAMES), default=None)
@click.option("--hours", type=float, default=None, help="New hours, 1 to 9")
@click.option("--issue", default=None, help="New description")
@click.pass_context
def edit_entry(
    ctx: click.Context,
    entry_id: str,
    user: str,
    day: Optional[dt.date],
    activity: Optional[str],
    hours: Optional[float],
    issue: Optional[str],
):
    """Change fields of Pending entry ENTRY_ID.

    Fields that are not given keep their current value.

    Example:
        timesheet-cli edit-entry 12 --user ana@example.com --hours 6
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        timesheet_store, project_store = build_stores(settings)
        service = build_submission_service(settings, timesheet_store, project_store)

        current = run_async(timesheet_store.get(entry_id))
        changes = {
            name: value
            for name, value in (
                ("date", day),
                ("activity", activity),
                ("hours", hours),
                ("issue", issue),
            )
            if value is not None
        }
        if not changes:
            click.echo(format_info("Nothing to change"))
            return

        fields = EntryFields.from_entry(current).model_copy(update=changes)
        entry = run_async(service.edit(entry_id, user, fields))
        click.echo(format_success(f"Updated entry {entry.id}"))


@click.command(name="delete-entry")
@click.argument("entry_id")
@click.option("--user", required=True, help="Email of the entry's owner")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx: click.Context, entry_id: str, user: str, yes: bool):
    """Delete Pending entry ENTRY_ID.

    Example:
        timesheet-cli delete-entry 12 --user ana@example.com --yes
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        timesheet_store, project_store = build_stores(settings)
        service = build_submission_service(settings, timesheet_store, project_store)

        if not yes:
            click.confirm(f"Delete timesheet entry {entry_id}?", abort=True)

        run_async(service.delete(entry_id, user))
        click.echo(format_success(f"Deleted entry {entry_id}"))
