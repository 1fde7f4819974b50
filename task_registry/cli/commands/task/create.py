"""Create task command."""

import click

from task_registry.cli.helpers import get_registry


@click.command()
@click.argument('name')
@click.option('--description', '-d', required=True, help='What the task is about')
@click.option('--notes', '-n', help='Optional notes')
@click.option('--depends-on', 'dependencies', multiple=True,
              help='ID of a prerequisite task (repeatable)')
def create(name, description, notes, dependencies):
    """Create a new pending task"""
    registry = get_registry()
    task_item = registry.create_task(name, description, notes=notes,
                                     dependencies=list(dependencies))

    click.echo(f"✅ Created task {task_item.id}")
    click.echo(f"   Name: {task_item.name}")
    if task_item.dependencies:
        click.echo(f"   Depends on: {', '.join(task_item.dependency_ids)}")
