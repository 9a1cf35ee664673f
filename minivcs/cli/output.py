"""CLI output utilities and formatting."""

import click
from colorama import Fore, Style

from minivcs.core.errors import VcsError
from minivcs.core.repository import Repository


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def fail(exc: VcsError):
    """Report a failed operation and abort with exit status 1."""
    click.echo(error(str(exc)), err=True)
    raise click.Abort()


def open_repository() -> Repository:
    """Find the repository containing the current directory, or abort."""
    try:
        return Repository.discover('.')
    except VcsError as e:
        fail(e)
