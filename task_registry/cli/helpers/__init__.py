"""CLI Helper Functions for Task Registry.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- Data directory resolution
- Task ID resolution with short ID support
- Consistent table formatting for output
"""

import os
import sys
from pathlib import Path
from typing import Any, List, Optional

import click
from tabulate import tabulate

from task_registry.core.constants import DATA_DIR_ENV_VAR, DATA_DIR_NAME
from task_registry.models.task import Task, TaskStatus
from task_registry.registry import TaskRegistry
from task_registry.services.exceptions import StorageError


def get_data_dir() -> Path:
    """Resolve the registry data directory.

    Uses ``--data-dir`` from the root command when given, then the
    TASK_REGISTRY_DATA_DIR environment variable, then ``./.task-registry``.
    """
    ctx = click.get_current_context(silent=True)
    data_dir = None
    if ctx is not None and isinstance(ctx.obj, dict):
        data_dir = ctx.obj.get('data_dir')
    data_dir = data_dir or os.environ.get(DATA_DIR_ENV_VAR)
    if data_dir:
        return Path(data_dir)
    return Path.cwd() / DATA_DIR_NAME


def get_registry() -> TaskRegistry:
    """Open the registry for the current data directory.

    Note:
        Exits with an error message if the store cannot be read.
    """
    try:
        registry = TaskRegistry.from_data_dir(get_data_dir())
        registry.store.load()
        return registry
    except (OSError, StorageError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def resolve_task_id(registry: TaskRegistry, task_id: str,
                    include_archive: bool = False) -> Task:
    """Resolve a task ID with short ID support.

    Args:
        registry: The task registry
        task_id: Full or partial task ID
        include_archive: Also look up full IDs in archived snapshots

    Returns:
        The resolved task

    Note:
        Exits with error if task not found or multiple matches.
    """
    task_item = registry.get_task(task_id)
    if task_item:
        return task_item

    # Try to find by short ID
    matching_tasks = [t for t in registry.list_tasks() if t.id.startswith(task_id)]
    if len(matching_tasks) == 1:
        return matching_tasks[0]
    if len(matching_tasks) > 1:
        click.echo(f"Error: Multiple tasks found starting with '{task_id}':", err=True)
        for task in matching_tasks:
            click.echo(f"  - {task.id}: {task.name}", err=True)
        sys.exit(1)

    if include_archive:
        task_item = registry.get_task_detail(task_id)
        if task_item:
            return task_item

    click.echo(f"Error: No task found with ID: {task_id}", err=True)
    sys.exit(1)


STATUS_COLORS = {
    TaskStatus.PENDING: 'white',
    TaskStatus.IN_PROGRESS: 'yellow',
    TaskStatus.COMPLETED: 'green',
    TaskStatus.BLOCKED: 'red'
}


def format_status(status: TaskStatus) -> str:
    """Render a status in its table color."""
    return click.style(status.value.upper(), fg=STATUS_COLORS.get(status, 'white'))


def format_task_table(tasks: List[Task],
                      headers: Optional[List[str]] = None,
                      max_name_length: int = 50) -> str:
    """Format tasks as a table with consistent styling.

    Args:
        tasks: List of tasks to display
        headers: Optional custom headers (defaults to standard headers)
        max_name_length: Maximum name length before truncation

    Returns:
        Formatted table string
    """
    if headers is None:
        headers = ["ID", "STATUS", "NAME", "DEPS", "UPDATED"]

    table_data = []
    for task_item in tasks:
        name = task_item.name.split('\n')[0]
        if len(name) > max_name_length:
            name = name[:max_name_length-3] + "..."

        row = [
            task_item.id[:8],  # Short ID
            format_status(task_item.status),
            name,
            len(task_item.dependencies),
            task_item.updated_at.strftime("%Y-%m-%d %H:%M")
        ]
        table_data.append(row)

    if table_data:
        return tabulate(table_data, headers=headers, tablefmt="simple",
                        colalign=("left", "left", "left", "right", "right"))
    return tabulate(table_data, headers=headers, tablefmt="simple")


def print_table(headers: List[str], rows: List[List[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    table_str = tabulate(rows, headers=headers, tablefmt=tablefmt)
    click.echo(table_str)


__all__ = [
    'get_data_dir',
    'get_registry',
    'resolve_task_id',
    'format_status',
    'format_task_table',
    'print_table',
]
