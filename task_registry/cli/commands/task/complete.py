"""Complete task command."""

import sys

import click

from task_registry.cli.helpers import get_registry, resolve_task_id


@click.command()
@click.argument('task_id')
@click.option('--summary', '-s', help='Completion summary (generated when omitted)')
def complete(task_id, summary):
    """Mark an in-progress task as completed"""
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    result = registry.complete_task(task_item.id, summary)
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    click.echo(f"✅ {result.message}")
    click.echo(f"   Summary: {result.task.summary}")
