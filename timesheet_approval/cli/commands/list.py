"""List timesheet entries command."""

from typing import Optional

import click

from timesheet_approval.aggregators.entry_filter import (
    DateBucket,
    EntryFilter,
    FilterEngine,
)
from timesheet_approval.cli.commands.log_time import ACTIVITY_NAMES
from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import (
    format_entries,
    format_info,
    format_success,
)
from timesheet_approval.cli.utils.runtime import build_stores, run_async
from timesheet_approval.config.settings import get_config
from timesheet_approval.models.timesheet import Activity, ApprovalStatus

STATUS_NAMES = [status.value for status in ApprovalStatus]
BUCKET_NAMES = [bucket.value for bucket in DateBucket]


@click.command(name="list")
@click.option("--project", default=None, help="Only entries of this project")
@click.option("--user", default=None, help="Only entries of this user")
@click.option("--status", type=click.Choice(STATUS_NAMES), default=None)
@click.option("--activity", type=click.Choice(ACTIVITY_NAMES), default=None)
@click.option("--date-bucket", type=click.Choice(BUCKET_NAMES), default=None)
@click.option("--unit", default=None, help="Only entries of this unit")
@click.pass_context
def list_entries(
    ctx: click.Context,
    project: Optional[str],
    user: Optional[str],
    status: Optional[str],
    activity: Optional[str],
    date_bucket: Optional[str],
    unit: Optional[str],
):
    """List timesheet entries matching every given filter.

    Example:
        timesheet-cli list --status Pending --date-bucket this-week
    """
    with with_error_handling(ctx.obj["debug"]):
        timesheet_store, _ = build_stores(get_config())
        entries = run_async(timesheet_store.list())

        engine = FilterEngine(entries)
        visible = engine.apply(
            EntryFilter(
                date_bucket=DateBucket(date_bucket) if date_bucket else None,
                status=ApprovalStatus(status) if status else None,
                activity=Activity(activity) if activity else None,
                user=user,
                unit=unit,
                project=project,
            )
        )

        if not visible:
            click.echo(format_info("No timesheet entries match the filters."))
            return

        click.echo(format_entries(visible))
        click.echo()
        click.echo(
            format_success(
                f"{len(visible)} entr{'y' if len(visible) == 1 else 'ies'}, "
                f"{engine.total_hours()} hours"
            )
        )
