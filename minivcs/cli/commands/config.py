"""Config command - read and write configuration."""

import click

from minivcs.core.config import get_config, split_key
from minivcs.core.errors import VcsError
from minivcs.core.repository import Repository
from minivcs.cli.output import success, info, warning, fail


def load_config():
    """Config for the current repository, or global-only outside one."""
    return get_config(Repository.find_repository('.'))


@click.group('config')
def config_cmd():
    """
    Get and set configuration options.

    Values live in .vcs/config inside a repository and ~/.vcsconfig
    globally. Keys are written as section.name, e.g. user.email.
    """


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """Print the value of KEY."""
    try:
        click.echo(load_config().get_value(key))
    except VcsError as e:
        fail(e)


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'global_config', is_flag=True, help='Write to the global config')
def config_set(key, value, global_config):
    """Set KEY to VALUE."""
    try:
        load_config().set_value(key, value, global_config=global_config)
    except VcsError as e:
        fail(e)
    click.echo(success(f"Set {key} = {value}"))


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'global_config', is_flag=True, help='Remove from the global config')
def config_unset(key, global_config):
    """Remove KEY."""
    try:
        section, option = split_key(key)
        removed = load_config().unset(section, option, global_config=global_config)
    except VcsError as e:
        fail(e)

    if removed:
        click.echo(success(f"Removed {key}"))
    else:
        click.echo(warning(f"Key {key} was not set"))


@config_cmd.command('list')
@click.option('--global', 'global_only', is_flag=True, help='Only list global values')
def config_list(global_only):
    """List every configured value."""
    try:
        values = load_config().list_all(global_only=global_only)
    except VcsError as e:
        fail(e)

    if not values:
        click.echo(info("No configuration values set"))
        return

    for key in sorted(values):
        click.echo(f"{key}={values[key]}")
