"""Hours summary command."""

from typing import Optional

import click

from timesheet_approval.aggregators.hours_summary import (
    hours_matrix,
    total_hours_by_project,
)
from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import (
    format_info,
    format_matrix,
    format_table,
)
from timesheet_approval.cli.utils.runtime import build_stores, run_async
from timesheet_approval.config.settings import get_config


@click.command(name="summary")
@click.option("--user", default=None, help="Only this user's hours per project")
@click.pass_context
def summary(ctx: click.Context, user: Optional[str]):
    """Show logged hours per project.

    Without --user, shows a user by project matrix.

    Example:
        timesheet-cli summary
        timesheet-cli summary --user ana@example.com
    """
    with with_error_handling(ctx.obj["debug"]):
        timesheet_store, _ = build_stores(get_config())
        entries = run_async(timesheet_store.list())

        if user is not None:
            totals = total_hours_by_project(entries, user=user)
            if not totals:
                click.echo(format_info(f"No hours logged by {user}."))
                return
            rows = [[project, hours] for project, hours in totals.items()]
            rows.append(["Total", sum(totals.values())])
            click.echo(format_table(["Project", "Hours"], rows))
            return

        matrix = hours_matrix(entries)
        if matrix.empty:
            click.echo(format_info("No hours logged yet."))
            return
        click.echo(format_matrix(matrix))
