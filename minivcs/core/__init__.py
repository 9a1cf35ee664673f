"""Core functionality for minivcs.

This module contains the core data structures:
- Stored objects (Blob, Tree, Commit)
- Repository management and the object store
- Index/staging area
- Reference management
- Configuration management
- Repository lock
- Hashing utilities

For staging, commit, status and history, see minivcs.operations
"""

from minivcs.core.objects import VcsObject, Blob, Tree, TreeEntry, Commit, decode_object, encode_object
from minivcs.core.repository import Repository
from minivcs.core.hash import hash_object, hash_file
from minivcs.core.index import Index, IndexEntry
from minivcs.core.refs import RefManager
from minivcs.core.config import Config, get_config
from minivcs.core.lock import RepoLock

__all__ = [
    'VcsObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'decode_object',
    'encode_object',
    'Repository',
    'Index',
    'IndexEntry',
    'RefManager',
    'Config',
    'get_config',
    'RepoLock',
    'hash_object',
    'hash_file',
]
