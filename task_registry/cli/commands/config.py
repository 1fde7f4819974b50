"""Configuration management commands for Task Registry."""

import sys

import click

from ...utils.config_manager import ConfigManager
from ..helpers import get_data_dir, print_table


@click.group()
def config():
    """Manage registry configuration"""
    pass


@config.command()
def show():
    """Display current registry configuration"""
    data_dir = get_data_dir()
    registry_config = ConfigManager(data_dir).load_config()

    click.echo(f"Data directory: {data_dir}")
    rows = [[key, value] for key, value in registry_config.to_dict().items()]
    print_table(["SETTING", "VALUE"], rows)


@config.command(name='set')
@click.argument('key')
@click.argument('value')
def set_value(key, value):
    """Set a registry setting (e.g. maxArchiveFiles 20)"""
    config_manager = ConfigManager(get_data_dir())
    try:
        config_manager.set_value(key, value)
    except KeyError:
        click.echo(f"Error: Unknown setting '{key}'", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: Invalid value for {key}: {e}", err=True)
        sys.exit(1)

    click.echo(f"Set {key} to {value}")
