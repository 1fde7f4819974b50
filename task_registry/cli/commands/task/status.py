"""Set task status command."""

import sys

import click

from task_registry.cli.helpers import format_status, get_registry, resolve_task_id
from task_registry.models.task import TaskStatus


@click.command()
@click.argument('task_id')
@click.argument('new_status', type=click.Choice([s.value for s in TaskStatus]))
def status(task_id, new_status):
    """Set a task's status directly"""
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    updated = registry.set_status(task_item.id, new_status)
    if updated is None:
        click.echo(f"Error: Task {task_item.id[:8]} is completed and can no longer change status",
                   err=True)
        sys.exit(1)

    click.echo(f"Task {updated.id[:8]} is now {format_status(updated.status)}")
