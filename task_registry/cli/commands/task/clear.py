"""Clear all tasks command."""

import click

from task_registry.cli.helpers import get_registry


@click.command()
@click.confirmation_option(prompt='Delete every task? Completed tasks are backed up first.')
def clear():
    """Clear all tasks, archiving completed ones"""
    registry = get_registry()
    result = registry.clear_all()

    click.echo(f"🧹 {result.message}")
    if result.backup_file:
        click.echo(f"   Backup: {result.backup_file}")
