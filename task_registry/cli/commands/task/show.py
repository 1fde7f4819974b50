"""Show task command."""

import click

from task_registry.cli.helpers import format_status, get_registry, resolve_task_id


def _echo_block(text):
    for line in text.split('\n'):
        click.echo(f"   {line}")


@click.command()
@click.argument('task_id')
@click.option('--history', is_flag=True, help='Show conversation history')
def show(task_id, history):
    """Show detailed information about a task"""
    registry = get_registry()

    # Archived tasks can be shown by full ID
    task_item = resolve_task_id(registry, task_id, include_archive=True)

    click.echo("\n" + "=" * 80)
    click.echo(f"Task Details: {task_item.id}")
    click.echo("=" * 80)

    click.echo("\n📋 Basic Information:")
    click.echo(f"   Name: {task_item.name}")
    click.echo(f"   Status: {format_status(task_item.status)}")
    click.echo(f"   Created: {task_item.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    click.echo(f"   Updated: {task_item.updated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    if task_item.completed_at:
        click.echo(f"   Completed: {task_item.completed_at.strftime('%Y-%m-%d %H:%M:%S')}")

    click.echo("\n📄 Description:")
    _echo_block(task_item.description)

    if task_item.notes:
        click.echo("\n📝 Notes:")
        _echo_block(task_item.notes)

    if task_item.dependencies:
        click.echo("\n🔗 Dependencies:")
        for dep_id in task_item.dependency_ids:
            dep = registry.get_task(dep_id)
            label = f"{dep.name} [{dep.status.value}]" if dep else "missing"
            click.echo(f"   {dep_id} ({label})")

    if task_item.related_files:
        click.echo("\n📁 Related Files:")
        for related in task_item.related_files:
            lines = f" (lines {related.line_start}-{related.line_end})" if related.line_start else ""
            click.echo(f"   [{related.type.value}] {related.path}{lines}")

    if task_item.implementation_guide:
        click.echo("\n🛠  Implementation Guide:")
        _echo_block(task_item.implementation_guide)

    if task_item.verification_criteria:
        click.echo("\n🔍 Verification Criteria:")
        _echo_block(task_item.verification_criteria)

    if task_item.summary:
        click.echo("\n✅ Summary:")
        _echo_block(task_item.summary)

    if history and task_item.conversation_history:
        click.echo("\n💬 Conversation History:")
        for i, entry in enumerate(task_item.conversation_history, 1):
            click.echo(f"\n   [{i}] {entry.timestamp.strftime('%Y-%m-%d %H:%M:%S')} ({entry.role})")
            for line in entry.content.split('\n'):
                click.echo(f"       {line}")
