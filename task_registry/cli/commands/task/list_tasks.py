"""List tasks command."""

import click

from task_registry.cli.helpers import format_task_table, get_data_dir, get_registry
from task_registry.models.task import TaskStatus


@click.command()
@click.option('--status', type=click.Choice([s.value for s in TaskStatus]),
              help='Filter by task status')
def list(status):
    """List tasks in the registry"""
    registry = get_registry()
    tasks = registry.list_tasks(status)

    if not tasks:
        if status:
            click.echo(f"No tasks with status '{status}'")
        else:
            click.echo("No tasks found")
        return

    click.echo(f"\n📋 Tasks in {get_data_dir()}:")
    click.echo(format_task_table(tasks))
    click.echo(f"\n{len(tasks)} task(s)")
