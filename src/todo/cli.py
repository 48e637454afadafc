"""CLI interface for todo."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from todo import __version__
from todo.config import TodoConfig
from todo.errors import TodoError
from todo.models import PositionedTask, TaskList
from todo.storage import load_tasks, save_tasks

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(ctx: click.Context, error: TodoError) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    ctx.exit(1)


def _print_tasks(entries: list[PositionedTask], title: str) -> None:
    if not entries:
        console.print("[dim]No tasks.[/dim] Add one with [cyan]todo add[/cyan]")
        return

    table = Table(title=title, show_header=True)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Due", style="magenta")
    table.add_column("Task", style="white")

    for position, task in entries:
        due = task.due_date.isoformat() if task.due_date else "[dim]-[/dim]"
        table.add_row(str(position), due, escape(task.description))

    console.print(table)


def _load(ctx: click.Context) -> TaskList:
    path: Path = ctx.obj["path"]
    return load_tasks(path)


def _save(ctx: click.Context, task_list: TaskList) -> None:
    path: Path = ctx.obj["path"]
    save_tasks(task_list, path)
    logger.info("TODO list updated: %s", path)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="todo")
@click.option(
    "--file",
    "-f",
    "list_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Task list file (default: .todo, or the TODO_FILE env var)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, list_file: Path | None, verbose: bool) -> None:
    """todo - a personal task list.

    Tasks are addressed by their position in the list, starting at 1.

    \b
    Examples:
      todo                           # List tasks in the order they were added
      todo add "Pick up groceries"
      todo add "Vet appointment" 2025-09-01
      todo date                      # List tasks by due date
      todo move 3 1                  # Move task 3 to the top
      todo remove 2
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = TodoConfig.load()
    except TodoError as e:
        _fail(ctx, e)

    ctx.obj["config"] = config
    ctx.obj["path"] = list_file if list_file is not None else config.list_path()
    logger.debug("Using task list %s", ctx.obj["path"])

    if ctx.invoked_subcommand is None:
        ctx.invoke(list_command)


@main.command("list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """List tasks in insertion order (default command)."""
    try:
        task_list = _load(ctx)
    except TodoError as e:
        _fail(ctx, e)

    _print_tasks(task_list.in_insertion_order(), title="Tasks")


@main.command("date")
@click.pass_context
def date_command(ctx: click.Context) -> None:
    """List tasks by due date, earliest first.

    Tasks due on the same day keep the order they were added in. Tasks
    without a due date come last unless "undated_last" is false in .todo.json.
    """
    config: TodoConfig = ctx.obj["config"]

    try:
        task_list = _load(ctx)
    except TodoError as e:
        _fail(ctx, e)

    _print_tasks(
        task_list.by_due_date(undated_last=config.undated_last),
        title="Tasks by due date",
    )


@main.command("add")
@click.argument("description")
@click.argument("due_date", required=False)
@click.option("--at", "-a", "position", type=int, help="Insert at POSITION instead of the end")
@click.pass_context
def add_command(
    ctx: click.Context,
    description: str,
    due_date: str | None,
    position: int | None,
) -> None:
    """Add a task, optionally with a DUE_DATE (YYYY-MM-DD).

    \b
    Examples:
      todo add "Pick up groceries"
      todo add "Vet appointment" 2025-09-01
      todo add "Call mum" --at 1
    """
    try:
        task_list = _load(ctx)
        task = task_list.add(description, due_date, position=position)
        _save(ctx, task_list)
    except TodoError as e:
        _fail(ctx, e)

    console.print(f"[green]Added:[/green] {escape(str(task))}")
    _print_tasks(task_list.in_insertion_order(), title="Tasks")


@main.command("remove", context_settings={"ignore_unknown_options": True})
@click.argument("position", type=int)
@click.pass_context
def remove_command(ctx: click.Context, position: int) -> None:
    """Remove the task at POSITION."""
    try:
        task_list = _load(ctx)
        removed = task_list.remove(position)
        _save(ctx, task_list)
    except TodoError as e:
        _fail(ctx, e)

    console.print(f"[green]Removed:[/green] {escape(str(removed))}")
    _print_tasks(task_list.in_insertion_order(), title="Tasks")


@main.command("move", context_settings={"ignore_unknown_options": True})
@click.argument("from_position", type=int)
@click.argument("to_position", type=int)
@click.pass_context
def move_command(ctx: click.Context, from_position: int, to_position: int) -> None:
    """Move the task at FROM_POSITION to TO_POSITION.

    Tasks in between shift by one place to make room.

    Example:

        todo move 1 3
    """
    try:
        task_list = _load(ctx)
        task_list.move(from_position, to_position)
        if from_position != to_position:
            _save(ctx, task_list)
    except TodoError as e:
        _fail(ctx, e)

    console.print(f"[green]Moved:[/green] {from_position} -> {to_position}")
    _print_tasks(task_list.in_insertion_order(), title="Tasks")
