"""Reset command - unstage files."""

import click
from pathlib import Path

from minivcs.core.errors import VcsError
from minivcs.operations.staging import unstage_paths
from minivcs.cli.output import success, info, fail, open_repository


@click.command('reset')
@click.argument('paths', nargs=-1)
def reset_cmd(paths):
    """
    Remove files from the staging area.

    The work tree is not touched. With no paths, every staged file is
    unstaged.

    Examples:
        vcs reset file.txt
        vcs reset
    """
    repo = open_repository()

    resolved = [str(Path(p) if Path(p).is_absolute() else Path.cwd() / p) for p in paths]

    try:
        removed = unstage_paths(repo, resolved)
    except VcsError as e:
        fail(e)

    if not removed:
        click.echo(info("No files were unstaged"))
    elif not paths:
        click.echo(success("Unstaged all files"))
    else:
        click.echo(success(f"Unstaged {len(removed)} file(s)"))
        for path in removed:
            click.echo(info(f"  {path}"))
