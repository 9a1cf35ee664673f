"""minivcs - a minimal content-addressed version control system."""

__version__ = '0.1.0'

from minivcs.core.repository import Repository
from minivcs.core.objects import VcsObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'VcsObject',
    'Blob',
    'Tree',
    'Commit',
]
