"""Update task command."""

import sys

import click

from task_registry.cli.helpers import get_registry, resolve_task_id


@click.command()
@click.argument('task_id')
@click.option('--name', help='New task name')
@click.option('--description', '-d', help='New description')
@click.option('--notes', '-n', help='New notes')
@click.option('--depends-on', 'dependencies', multiple=True,
              help='Replace prerequisites with these task IDs (repeatable)')
@click.option('--guide', 'implementation_guide', help='New implementation guide')
@click.option('--criteria', 'verification_criteria', help='New verification criteria')
def update(task_id, name, description, notes, dependencies, implementation_guide,
           verification_criteria):
    """Update the content of a task that is not completed"""
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    result = registry.update_content(
        task_item.id,
        name=name,
        description=description,
        notes=notes,
        dependencies=list(dependencies) or None,
        implementation_guide=implementation_guide,
        verification_criteria=verification_criteria,
    )
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    click.echo(f"✅ {result.message}")
