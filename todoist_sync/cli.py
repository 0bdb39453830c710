"""Command line entrypoint for the Todoist Sync client."""

from contextlib import contextmanager
from typing import Iterator, Optional

import typer

from todoist_sync.api import CallContext, TodoistSyncClient
from todoist_sync.commands import AddProject, AddTask, DeleteProject
from todoist_sync.config import get_settings
from todoist_sync.errors import TodoistSyncError
from todoist_sync.logs import configure_logging
from todoist_sync.types import Pagination
from todoist_sync.version import get_version

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Todoist Sync API CLI")
projects_app = typer.Typer(no_args_is_help=True, help="List and modify projects")
sections_app = typer.Typer(no_args_is_help=True, help="List sections")
tasks_app = typer.Typer(no_args_is_help=True, help="List and add tasks")
app.add_typer(projects_app, name="projects")
app.add_typer(sections_app, name="sections")
app.add_typer(tasks_app, name="tasks")


def build_client(debug: bool) -> TodoistSyncClient:
    settings = get_settings()
    return TodoistSyncClient.from_settings(settings.model_copy(update={"debug": settings.debug or debug}))


@contextmanager
def _session(ctx: typer.Context) -> Iterator[tuple[TodoistSyncClient, CallContext]]:
    """Yield a client and call context; any library error becomes exit code 1."""
    options = ctx.find_root().obj or {}
    try:
        with build_client(options.get("debug", False)) as client:
            timeout = options.get("timeout")
            yield client, CallContext.with_timeout(timeout) if timeout else CallContext.background()
    except TodoistSyncError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _show_version(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show the version and exit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log request details"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Give up after this many seconds"),
) -> None:
    configure_logging(debug)
    ctx.obj = {"debug": debug, "timeout": timeout}


@app.command()
def sync(
    ctx: typer.Context,
    sync_token: str = typer.Option("", "--sync-token", help="Incremental sync from this token ('*' for full)"),
) -> None:
    """Run a read-only sync and print the new sync token."""
    with _session(ctx) as (client, call_ctx):
        envelope = client.sync(call_ctx, sync_token=sync_token or None)
        typer.echo(f"sync_token: {envelope.sync_token}")
        typer.echo(f"full_sync: {envelope.full_sync}")
        typer.echo(f"projects: {len(envelope.projects)} sections: {len(envelope.sections)} items: {len(envelope.items)}")


@projects_app.command("list")
def list_projects(ctx: typer.Context) -> None:
    with _session(ctx) as (client, call_ctx):
        projects, _ = client.projects.list(call_ctx)
        for project in projects:
            typer.echo(f"{project.id}\t{project.name}")


@projects_app.command("get")
def get_project(
    ctx: typer.Context,
    project_id: Optional[str] = typer.Option(None, "--id", help="Project id"),
    name: Optional[str] = typer.Option(None, "--name", help="Project name"),
) -> None:
    if (project_id is None) == (name is None):
        typer.echo("Pass exactly one of --id or --name.", err=True)
        raise typer.Exit(code=2)
    with _session(ctx) as (client, call_ctx):
        if project_id is not None:
            project = client.projects.get_by_id(call_ctx, project_id)
        else:
            project = client.projects.get_by_name(call_ctx, name)
        typer.echo(f"{project.id}\t{project.name}\tparent={project.parent_id}\tchild_order={project.child_order}")


@projects_app.command("add")
def add_project(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new project"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id"),
    color: Optional[str] = typer.Option(None, "--color"),
    temp_id: Optional[str] = typer.Option(None, "--temp-id", help="Placeholder id to resolve after creation"),
) -> None:
    args = AddProject(name=name, parent_id=parent_id, color=color, temp_id=temp_id)
    with _session(ctx) as (client, call_ctx):
        _, response = client.projects.add(call_ctx, args)
        created = [str(real_id) for real_id in response.temp_id_mapping.values()]
        typer.echo(f"created {name}: {', '.join(created) or 'unknown id'}")


@projects_app.command("delete")
def delete_project(ctx: typer.Context, project_id: str = typer.Argument(..., help="Project id")) -> None:
    with _session(ctx) as (client, call_ctx):
        client.projects.delete(call_ctx, DeleteProject(id=project_id))
        typer.echo(f"deleted {project_id}")


@projects_app.command("archived")
def archived_projects(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", min=1, max=500),
    offset: int = typer.Option(0, "--offset", min=0),
) -> None:
    pagination = None
    if limit is not None:
        pagination = Pagination(limit=limit, offset=offset)
    elif offset:
        pagination = Pagination(offset=offset)
    with _session(ctx) as (client, call_ctx):
        for project in client.projects.get_archived(call_ctx, pagination):
            typer.echo(f"{project.id}\t{project.name}")


@sections_app.command("list")
def list_sections(ctx: typer.Context) -> None:
    with _session(ctx) as (client, call_ctx):
        sections, _ = client.sections.list(call_ctx)
        for section in sections:
            typer.echo(f"{section.id}\t{section.project_id}\t{section.name}")


@tasks_app.command("list")
def list_tasks(
    ctx: typer.Context,
    project_id: Optional[str] = typer.Option(None, "--project-id", help="Only tasks of this project"),
) -> None:
    with _session(ctx) as (client, call_ctx):
        tasks, _ = client.tasks.list(call_ctx)
        for task in tasks:
            if project_id is not None and str(task.project_id) != project_id:
                continue
            typer.echo(f"{task.id}\t{task.project_id}\t{task.content}")


@tasks_app.command("add")
def add_task(
    ctx: typer.Context,
    content: str = typer.Argument(..., help="Task content"),
    project_id: Optional[str] = typer.Option(None, "--project-id"),
    due_string: Optional[str] = typer.Option(None, "--due", help="Natural language due date, e.g. 'tomorrow'"),
) -> None:
    args = AddTask(content=content, project_id=project_id, due={"string": due_string} if due_string else None)
    with _session(ctx) as (client, call_ctx):
        _, response = client.tasks.add(call_ctx, args)
        created = [str(real_id) for real_id in response.temp_id_mapping.values()]
        typer.echo(f"created task: {', '.join(created) or 'unknown id'}")


if __name__ == "__main__":
    app()
