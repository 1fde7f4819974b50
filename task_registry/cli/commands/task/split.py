"""Batch task creation command."""

import json
import sys

import click
import yaml

from task_registry.cli.helpers import format_task_table, get_registry
from task_registry.models.task import UpdateMode


def _load_tasks(path):
    with open(path, encoding='utf-8') as f:
        text = f.read()
    if path.endswith('.json'):
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if isinstance(data, dict):
        data = data.get('tasks', [])
    return data


@click.command()
@click.argument('tasks_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--mode', type=click.Choice([m.value for m in UpdateMode]),
              default=UpdateMode.CLEAR_ALL_TASKS.value, show_default=True,
              help='How the batch is merged with existing tasks')
@click.option('--analysis', help='Analysis result recorded on every task in the batch')
def split(tasks_file, mode, analysis):
    """Create or update tasks from a JSON or YAML file"""
    try:
        data = _load_tasks(tasks_file)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        click.echo(f"Error: Could not parse {tasks_file}: {e}", err=True)
        sys.exit(1)

    if not isinstance(data, list):
        click.echo("Error: Expected a list of tasks", err=True)
        sys.exit(1)

    registry = get_registry()
    result = registry.split_tasks(data, mode, global_analysis_result=analysis)
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    click.echo(f"✅ {result.message}")
    if result.tasks:
        click.echo(format_task_table(result.tasks))
