"""CLI commands for minivcs."""

from minivcs.cli.commands.init import init_cmd
from minivcs.cli.commands.add import add_cmd
from minivcs.cli.commands.commit import commit_cmd
from minivcs.cli.commands.status import status_cmd
from minivcs.cli.commands.log import log_cmd
from minivcs.cli.commands.cat_file import cat_file_cmd
from minivcs.cli.commands.config import config_cmd
from minivcs.cli.commands.reset import reset_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'status_cmd', 'log_cmd',
           'cat_file_cmd', 'config_cmd', 'reset_cmd']
