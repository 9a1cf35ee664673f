"""Status command - show working tree status."""

import click
from colorama import Fore, Style

from minivcs.core.errors import VcsError
from minivcs.operations.status import compute_status
from minivcs.cli.output import success, info, fail, open_repository


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Changes staged for commit (in index)
    - Changes not staged for commit (modified or deleted files)
    - Untracked files (new files not in index)

    Examples:
        vcs status
    """
    repo = open_repository()

    try:
        report = compute_status(repo)
    except VcsError as e:
        fail(e)

    if report.branch:
        click.echo(f"On branch {Fore.CYAN}{report.branch}{Style.RESET_ALL}")
    elif report.head:
        click.echo(f"{Fore.YELLOW}HEAD detached at {report.head[:7]}{Style.RESET_ALL}")

    if report.head is None:
        click.echo()
        click.echo("No commits yet")

    click.echo()

    if report.has_staged:
        click.echo(Fore.GREEN + "Changes to be committed:" + Style.RESET_ALL)
        click.echo(info("  (use \"vcs reset <file>...\" to unstage)"))
        click.echo()

        for path in report.staged_new:
            click.echo(f"  {Fore.GREEN}new file:   {path}{Style.RESET_ALL}")
        for path in report.staged_modified:
            click.echo(f"  {Fore.GREEN}modified:   {path}{Style.RESET_ALL}")
        for path in report.staged_deleted:
            click.echo(f"  {Fore.RED}deleted:    {path}{Style.RESET_ALL}")

        click.echo()

    if report.has_unstaged:
        click.echo(Fore.YELLOW + "Changes not staged for commit:" + Style.RESET_ALL)
        click.echo(info("  (use \"vcs add <file>...\" to update what will be committed)"))
        click.echo()

        for path in report.modified:
            click.echo(f"  {Fore.YELLOW}modified:   {path}{Style.RESET_ALL}")
        for path in report.deleted:
            click.echo(f"  {Fore.YELLOW}deleted:    {path}{Style.RESET_ALL}")

        click.echo()

    if report.untracked:
        click.echo(Fore.RED + "Untracked files:" + Style.RESET_ALL)
        click.echo(info("  (use \"vcs add <file>...\" to include in what will be committed)"))
        click.echo()

        for path in report.untracked:
            click.echo(f"  {Fore.RED}{path}{Style.RESET_ALL}")

        click.echo()

    if report.is_clean:
        click.echo(success("Nothing to commit, working tree clean"))
    elif not report.has_staged:
        click.echo(info("No changes added to commit (use \"vcs add\")"))
