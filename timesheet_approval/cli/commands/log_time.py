"""Log time on a project."""

import datetime as dt

import click

from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import format_success
from timesheet_approval.cli.utils.params import ENTRY_DATE
from timesheet_approval.cli.utils.runtime import (
    build_stores,
    build_submission_service,
    run_async,
)
from timesheet_approval.config.settings import get_config
from timesheet_approval.models.timesheet import Activity, EntryFields
from timesheet_approval.utils.date_formats import format_entry_date

ACTIVITY_NAMES = [activity.value for activity in Activity]


@click.command(name="log-time")
@click.argument("project")
@click.option("--user", required=True, help="Email of the user logging time")
@click.option("--date", "day", type=ENTRY_DATE, required=True, help="Day worked")
@click.option(
    "--activity",
    type=click.Choice(ACTIVITY_NAMES),
    default=Activity.TASK.value,
    show_default=True,
)
@click.option("--hours", type=float, required=True, help="Whole hours, 1 to 9")
@click.option("--issue", required=True, help="What was worked on")
@click.pass_context
def log_time(
    ctx: click.Context,
    project: str,
    user: str,
    day: dt.date,
    activity: str,
    hours: float,
    issue: str,
):
    """Submit a timesheet entry on PROJECT for approval.

    Example:
        timesheet-cli log-time Apollo --user ana@example.com \\
            --date 12/06/2024 --hours 4 --issue "Implemented login form"
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        timesheet_store, project_store = build_stores(settings)
        service = build_submission_service(settings, timesheet_store, project_store)

        fields = EntryFields(date=day, activity=activity, hours=hours, issue=issue)
        entry = run_async(service.submit(project, user, fields))

        click.echo(
            format_success(
                f"Logged {entry.hours}h on {format_entry_date(entry.date)} "
                f"for {entry.project_name} (entry {entry.id}, "
                f"{entry.approval_status.value})"
            )
        )
