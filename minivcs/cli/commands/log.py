"""Log command - show commit history."""

from datetime import datetime

import click
from colorama import Fore, Style

from minivcs.core.errors import VcsError
from minivcs.operations.history import iter_history
from minivcs.cli.output import info, fail, open_repository


def format_timestamp(timestamp: int) -> str:
    """Format Unix timestamp to readable date."""
    try:
        dt = datetime.fromtimestamp(int(timestamp))
    except (OverflowError, OSError, ValueError):
        return "Unknown date"
    return dt.strftime("%a %b %d %H:%M:%S %Y")


@click.command('log')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
@click.option('-n', '--number', type=click.IntRange(min=1), help='Limit number of commits to show')
def log_cmd(oneline, number):
    """
    Show commit history.

    Follows parent links from HEAD, newest commit first.

    Examples:
        vcs log
        vcs log --oneline
        vcs log -n 5
    """
    repo = open_repository()

    if repo.refs.resolve_head() is None:
        click.echo(info("No commits yet"))
        return

    try:
        for commit_hash, commit in iter_history(repo, limit=number):
            if oneline:
                click.echo(f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {commit.summary}")
                continue

            click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}")
            click.echo(f"Author: {commit.author}")
            click.echo(f"Date:   {format_timestamp(commit.timestamp)}")
            click.echo()
            for line in commit.message.splitlines() or ['']:
                click.echo(f"    {line}")
            click.echo()
    except VcsError as e:
        fail(e)
