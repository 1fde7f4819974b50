"""Task complexity command."""

import click
from rich.console import Console
from rich.table import Table

from task_registry.cli.helpers import get_registry, resolve_task_id


@click.command()
@click.argument('task_id')
def complexity(task_id):
    """Assess how complex a task is"""
    console = Console()
    registry = get_registry()
    task_item = resolve_task_id(registry, task_id)

    assessment = registry.assess_complexity(task_item.id)

    table = Table(title=f"Complexity of {task_item.name}")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Description length", str(assessment.metrics.description_length))
    table.add_row("Dependencies", str(assessment.metrics.dependencies_count))
    table.add_row("Notes length", str(assessment.metrics.notes_length))
    console.print(table)

    console.print(f"\n[bold]Level:[/bold] [cyan]{assessment.level.value}[/cyan]")
    for advice in assessment.recommendations:
        console.print(f"  • {advice}")
