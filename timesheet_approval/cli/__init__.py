"""Timesheet CLI.

Command-line front end of the timesheet workflow: check a project's
entry window, log and edit time, list and filter entries, review
entries, summarise hours, and create and edit projects.
"""

import click

from timesheet_approval import __version__
from timesheet_approval.cli.commands import (
    add_project,
    delete_entry,
    edit_entry,
    edit_project,
    list_entries,
    log_time,
    review_entries,
    show_window,
    summary,
)
from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.config.logging_config import LoggingConfig, configure_logging
from timesheet_approval.config.settings import get_config


@click.group(help="Timesheet CLI - Log time and review timesheet entries")
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Timesheet CLI main entry point."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


# Register commands
cli.add_command(show_window)
cli.add_command(log_time)
cli.add_command(edit_entry)
cli.add_command(delete_entry)
cli.add_command(list_entries)
cli.add_command(review_entries)
cli.add_command(summary)
cli.add_command(add_project)
cli.add_command(edit_project)


def main():
    """Main entry point for the CLI."""
    with with_error_handling():
        settings = get_config()
    configure_logging(LoggingConfig.from_env(default_level=settings.log_level))
    cli()


if __name__ == "__main__":
    main()
