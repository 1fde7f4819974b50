"""Execution readiness command."""

import click

from task_registry.cli.helpers import format_task_table, get_registry, resolve_task_id


@click.command()
@click.argument('task_id', required=False)
def ready(task_id):
    """Check whether a task can run, or list every runnable task"""
    registry = get_registry()

    if task_id is None:
        tasks = registry.executable_tasks()
        if not tasks:
            click.echo("No tasks are ready to run")
            return
        click.echo("\n🟢 Ready to run:")
        click.echo(format_task_table(tasks))
        return

    task_item = resolve_task_id(registry, task_id)
    check = registry.can_execute(task_item.id)
    if check.can_execute:
        click.echo(f"🟢 Task {task_item.id[:8]} ({task_item.name}) can be executed")
        return

    click.echo(f"🔴 Task {task_item.id[:8]} ({task_item.name}) cannot be executed")
    for dep_id in check.blocked_by:
        dep = registry.get_task(dep_id)
        state = dep.status.value if dep else "missing"
        click.echo(f"   Blocked by {dep_id} ({state})")
