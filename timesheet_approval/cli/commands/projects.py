"""Create and edit projects."""

from typing import Optional, Tuple

import click

from timesheet_approval.cli.error_handlers import with_error_handling
from timesheet_approval.cli.utils.formatters import (
    format_info,
    format_success,
    format_warning,
)
from timesheet_approval.cli.utils.runtime import build_stores, run_async
from timesheet_approval.config.settings import get_config
from timesheet_approval.workflow.project_admin import (
    ProjectAdminService,
    ProjectSaveResult,
)


def _echo_saved(verb: str, result: ProjectSaveResult) -> None:
    project = result.project
    click.echo(
        format_success(
            f"{verb} project {project.name} (id {project.id}, "
            f"{project.start_date} to {project.end_date})"
        )
    )
    for warning in result.warnings:
        click.echo(format_warning(warning.message))


@click.command(name="add-project")
@click.argument("name")
@click.option("--code", required=True, help="Short project code")
@click.option("--start", "start_date", required=True, help="First day (DD-MM-YYYY)")
@click.option("--end", "end_date", required=True, help="Last day (DD-MM-YYYY)")
@click.option("--manager", required=True, help="Email of the project manager")
@click.option(
    "--assign",
    "assigned_users",
    multiple=True,
    help="Email of a user who may log time (repeatable)",
)
@click.option("--description", default="", help="Free text description")
@click.pass_context
def add_project(
    ctx: click.Context,
    name: str,
    code: str,
    start_date: str,
    end_date: str,
    manager: str,
    assigned_users: Tuple[str, ...],
    description: str,
):
    """Create project NAME.

    Example:
        timesheet-cli add-project Apollo --code APL --start 01-07-2024 \\
            --end 31-12-2024 --manager pm@example.com --assign ana@example.com
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        _, project_store = build_stores(settings)
        service = ProjectAdminService(project_store)

        result = run_async(
            service.create(
                name,
                code,
                start_date,
                end_date,
                manager=manager,
                assigned_users=assigned_users,
                description=description,
            )
        )
        _echo_saved("Created", result)


@click.command(name="edit-project")
@click.argument("project")
@click.option("--name", default=None, help="New project name")
@click.option("--code", default=None, help="New project code")
@click.option("--start", "start_date", default=None, help="New first day (DD-MM-YYYY)")
@click.option("--end", "end_date", default=None, help="New last day (DD-MM-YYYY)")
@click.option("--manager", "project_manager", default=None, help="New manager email")
@click.option(
    "--assign",
    "assigned_users",
    multiple=True,
    help="Replace the assigned users (repeatable)",
)
@click.option("--status", default=None, help="New lifecycle label")
@click.option("--description", default=None, help="New description")
@click.pass_context
def edit_project(
    ctx: click.Context,
    project: str,
    name: Optional[str],
    code: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    project_manager: Optional[str],
    assigned_users: Tuple[str, ...],
    status: Optional[str],
    description: Optional[str],
):
    """Change fields of PROJECT.

    Fields that are not given keep their current value. A start date in
    the past is allowed when editing.

    Example:
        timesheet-cli edit-project Apollo --end 31-03-2025 --assign bob@example.com
    """
    with with_error_handling(ctx.obj["debug"]):
        settings = get_config()
        _, project_store = build_stores(settings)
        service = ProjectAdminService(project_store)

        changes = {
            field: value
            for field, value in (
                ("name", name),
                ("code", code),
                ("start_date", start_date),
                ("end_date", end_date),
                ("project_manager", project_manager),
                ("status", status),
                ("description", description),
            )
            if value is not None
        }
        if assigned_users:
            changes["assigned_users"] = list(assigned_users)
        if not changes:
            click.echo(format_info("Nothing to change"))
            return

        result = run_async(service.update(project, changes))
        _echo_saved("Updated", result)
