"""Delete task command."""

import sys

import click

from task_registry.cli.helpers import get_registry, resolve_task_id


@click.command()
@click.argument('task_id')
@click.confirmation_option(prompt='Are you sure you want to delete this task?')
def delete(task_id):
    """Delete a task nothing else depends on"""
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    result = registry.delete_task(task_item.id)
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    click.echo(f"✅ Task {task_item.id[:8]} deleted successfully")
    click.echo(f"   Name: {task_item.name}")
