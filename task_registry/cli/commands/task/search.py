"""Search tasks command."""

import click

from task_registry.cli.helpers import format_task_table, get_registry


@click.command()
@click.argument('query', default='')
@click.option('--id', 'is_id', is_flag=True, help='Treat QUERY as a full task ID')
@click.option('--page', type=int, default=1, show_default=True, help='Page number')
@click.option('--page-size', type=int, default=5, show_default=True, help='Results per page')
def search(query, is_id, page, page_size):
    """Search live and archived tasks"""
    registry = get_registry()
    result = registry.search(query, is_id=is_id, page=page, page_size=page_size)

    if not result.tasks:
        click.echo(f"\nNo tasks found matching '{query}'")
        return

    click.echo(f"\n📋 Tasks matching '{query}':")
    click.echo(format_task_table(result.tasks))

    pagination = result.pagination
    click.echo(
        f"\nPage {pagination.current_page}/{pagination.total_pages}, "
        f"{pagination.total_results} matching task(s)"
    )
    if pagination.has_more:
        click.echo(f"Use --page {pagination.current_page + 1} to see more")
