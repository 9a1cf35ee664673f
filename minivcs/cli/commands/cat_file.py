"""cat-file command - inspect stored objects."""

import click

from minivcs.core.errors import InvalidInputError, VcsError
from minivcs.core.hash import is_hex_digest
from minivcs.core.objects import Blob, Commit, Tree
from minivcs.cli.output import fail, open_repository


@click.command('cat-file')
@click.argument('object_hash')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show the object type only')
def cat_file_cmd(object_hash, show_type):
    """
    Print the content of a stored object.

    Blobs are printed as-is, trees one entry per line as
    "<mode> <type> <hash>\\t<name>", and commits as their header fields
    followed by the message.

    Examples:
        vcs cat-file 3b18e512dba79e4c8300dd08aeb37f8e728b8dad
        vcs cat-file -t 3b18e512dba79e4c8300dd08aeb37f8e728b8dad
    """
    repo = open_repository()

    try:
        if not is_hex_digest(object_hash):
            raise InvalidInputError(f"Not a valid object hash: {object_hash}")
        obj = repo.read_object(object_hash.lower())
    except VcsError as e:
        fail(e)

    if show_type:
        click.echo(obj.type)
    elif isinstance(obj, Blob):
        click.echo(obj.data, nl=False)
    elif isinstance(obj, Tree):
        for entry in obj.entries:
            click.echo(f"{entry.mode} {entry.type} {entry.hash}\t{entry.name}")
    elif isinstance(obj, Commit):
        click.echo(obj.serialize().decode('utf-8'), nl=False)
