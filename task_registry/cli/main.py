"""Main CLI entry point for Task Registry."""

import logging

import click

from ..core.constants import DATA_DIR_ENV_VAR
from .commands.config import config
from .commands.task import task


@click.group()
@click.option('--data-dir', type=click.Path(file_okay=False), envvar=DATA_DIR_ENV_VAR,
              help='Registry data directory (default: ./.task-registry)')
@click.option('--verbose', '-v', is_flag=True, help='Log registry activity to stderr')
@click.pass_context
def cli(ctx, data_dir, verbose):
    """Task Registry - Track tasks, their dependencies and their lifecycle"""
    ctx.ensure_object(dict)
    ctx.obj['data_dir'] = data_dir
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


# Register commands
cli.add_command(task)
cli.add_command(config)


if __name__ == '__main__':
    cli()
