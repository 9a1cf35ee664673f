"""Main CLI entry point for minivcs."""

import logging

import click
from colorama import init

from minivcs import __version__
from minivcs.cli.commands import (init_cmd, add_cmd, commit_cmd, status_cmd, log_cmd,
                                  cat_file_cmd, config_cmd, reset_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s: %(message)s'


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log debug output to stderr')
def cli(verbose):
    """A minimal content-addressed version control system."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(status_cmd)
cli.add_command(log_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(config_cmd)
cli.add_command(reset_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
