"""Task command group and sub-commands."""

import click

from .create import create
from .list_tasks import list
from .show import show
from .update import update
from .start import start
from .complete import complete
from .status import status
from .delete import delete
from .ready import ready
from .split import split
from .clear import clear
from .search import search
from .complexity import complexity

__all__ = [
    'task',
    'create',
    'list',
    'show',
    'update',
    'start',
    'complete',
    'status',
    'delete',
    'ready',
    'split',
    'clear',
    'search',
    'complexity',
]


@click.group()
def task():
    """Manage registry tasks"""
    pass


# Register all sub-commands
task.add_command(create)
task.add_command(list)
task.add_command(show)
task.add_command(update)
task.add_command(start)
task.add_command(complete)
task.add_command(status)
task.add_command(delete)
task.add_command(ready)
task.add_command(split)
task.add_command(clear)
task.add_command(search)
task.add_command(complexity)
