"""Add command - stage files for commit."""

import click
from pathlib import Path

from minivcs.core.errors import VcsError
from minivcs.operations.staging import stage_paths
from minivcs.cli.output import success, info, fail, open_repository


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Directories are added recursively. Files matching patterns in
    .vcsignore are skipped. Line endings are stored as LF.

    Examples:
        vcs add file.txt
        vcs add src
        vcs add .
    """
    repo = open_repository()

    # Relative paths are relative to where the command runs.
    resolved = [str(Path(p) if Path(p).is_absolute() else Path.cwd() / p) for p in paths]

    try:
        staged = stage_paths(repo, resolved)
    except VcsError as e:
        fail(e)

    if not staged:
        click.echo(info("No files added"))
        return

    click.echo(success(f"Added {len(staged)} file(s) to staging area"))
    for path in staged:
        click.echo(info(f"  {path}"))
