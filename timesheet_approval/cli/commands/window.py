"""Show the entry window of a project."""

import datetime as dt
from typing import Optional

import click

from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import (
    format_info,
    format_success,
    format_warning,
)
from timesheet_approval.cli.utils.params import ENTRY_DATE
from timesheet_approval.cli.utils.runtime import (
    build_stores,
    build_submission_service,
    run_async,
)
from timesheet_approval.config.settings import get_config
from timesheet_approval.utils.date_formats import format_entry_date


@click.command(name="window")
@click.argument("project")
@click.option(
    "--today",
    type=ENTRY_DATE,
    default=None,
    help="Evaluate the window as of this day (default: today)",
)
@click.pass_context
def show_window(ctx: click.Context, project: str, today: Optional[dt.date]):
    """Show which days time can be logged on PROJECT.

    Example:
        timesheet-cli window Apollo
        timesheet-cli window Apollo --today 12/06/2024
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        timesheet_store, project_store = build_stores(settings)
        service = build_submission_service(settings, timesheet_store, project_store)

        window = run_async(service.resolve_window(project, today))

        click.echo(format_info(f"Project: {window.project_name}"))
        if not window.is_open:
            click.echo(
                format_warning(
                    f"Closed: earliest day {format_entry_date(window.min_date)} "
                    f"is after latest day {format_entry_date(window.max_date)}"
                )
            )
            return
        click.echo(
            format_success(
                f"Open from {format_entry_date(window.min_date)} "
                f"to {format_entry_date(window.max_date)} (weekdays only)"
            )
        )
