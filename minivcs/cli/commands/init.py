"""Initialize a new repository."""

import click
from pathlib import Path

from minivcs.core.errors import VcsError
from minivcs.core.repository import Repository
from minivcs.cli.output import success, info, error, fail


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new repository.

    Creates a .vcs directory with the object store, refs, HEAD and an
    empty index.

    Examples:
        vcs init                    # Initialize in current directory
        vcs init my-project         # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init()
    except VcsError as e:
        fail(e)
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"), err=True)
        raise click.Abort()

    click.echo(success(f"Initialized empty repository in {repo.vcs_dir}"))
