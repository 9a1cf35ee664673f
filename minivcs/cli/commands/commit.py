"""Commit command - create a commit from staged changes."""

import getpass

import click

from minivcs.core.config import get_config
from minivcs.core.errors import VcsError
from minivcs.operations.commit import commit_index, format_author
from minivcs.cli.output import success, info, fail, open_repository

DEFAULT_EMAIL = 'user@example.com'


def get_author(repo) -> str:
    """
    Author line from configuration.

    Falls back to the login name and a placeholder email when user.name
    or user.email are not configured.
    """
    name, email = get_config(repo).get_user_identity()
    if not name:
        try:
            name = getpass.getuser()
        except (KeyError, OSError):
            name = 'unknown'
    return format_author(name, email or DEFAULT_EMAIL)


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Author name and email (format: "Name <email>")')
def commit_cmd(message, author):
    """
    Record changes to the repository.

    Builds a tree from the staged files, records a commit pointing at the
    previous one, advances the current branch and clears the staging area.

    Examples:
        vcs commit -m "Initial commit"
        vcs commit -m "Add feature" --author "Jane <jane@example.com>"
    """
    repo = open_repository()

    try:
        if not author:
            author = get_author(repo)
        commit_hash = commit_index(repo, message, author)
    except VcsError as e:
        fail(e)

    summary = message.split('\n', 1)[0]
    click.echo(success(f"Committed {commit_hash[:8]}: {summary}"))
    click.echo(info(f"Author: {author}"))
