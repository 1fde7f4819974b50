"""Start task command."""

import sys

import click
from rich.console import Console

from task_registry.cli.helpers import get_registry, resolve_task_id


@click.command()
@click.argument('task_id')
def start(task_id):
    """Move a ready task into progress"""
    console = Console()
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    result = registry.start_task(task_item.id)
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    console.print(f"[green]🚀 {result.message}[/green]")

    if result.dependency_tasks:
        console.print("\n[bold]Completed prerequisites:[/bold]")
        for dep in result.dependency_tasks:
            console.print(f"  • {dep.name}: {dep.summary or 'no summary'}")

    if result.complexity:
        console.print(f"\n[bold]Complexity:[/bold] [cyan]{result.complexity.level.value}[/cyan]")
        for advice in result.complexity.recommendations:
            console.print(f"  • {advice}")
