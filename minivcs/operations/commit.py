"""Building trees from the index and recording commits."""

import logging
from typing import Dict, List, Optional, Sequence

from minivcs.core.errors import NothingToCommitError
from minivcs.core.index import Index, IndexEntry
from minivcs.core.lock import RepoLock
from minivcs.core.objects import DIR_MODE, Commit, Tree, TreeEntry

logger = logging.getLogger(__name__)


def build_tree_entries(repo, entries: Sequence[IndexEntry], base_path: str = '') -> List[TreeEntry]:
    """
    Build the entries of one directory level from a flat list of index entries.

    Entries directly in base_path become file entries, in input order,
    with the mode recorded in the index. Entries deeper down are grouped
    by their next path segment; each group is built recursively, stored
    as its own tree, and added as a directory entry. Directories come
    after files and are sorted by name.

    Subtrees are written before the tree that refers to them.

    Args:
        repo: Repository instance
        entries: The whole flat index (not just this level)
        base_path: Directory to build, '' for the root

    Returns:
        List of TreeEntry for this level
    """
    prefix = base_path + '/' if base_path else ''

    files: List[TreeEntry] = []
    subdirs: Dict[str, None] = {}

    for entry in entries:
        if not entry.path.startswith(prefix):
            continue

        parts = entry.path[len(prefix):].split('/')
        if len(parts) == 1:
            files.append(TreeEntry(entry.mode, parts[0], entry.hash))
        else:
            subdirs[parts[0]] = None

    tree_entries = files
    for name in sorted(subdirs):
        sub_entries = build_tree_entries(repo, entries, prefix + name)
        sub_hash = repo.write_object(Tree(sub_entries))
        tree_entries.append(TreeEntry(DIR_MODE, name, sub_hash))

    return tree_entries


def write_tree(repo, entries: Sequence[IndexEntry]) -> str:
    """
    Store the full tree for a set of index entries.

    Pass entries in a fixed order (Index.sorted_entries()) to get the
    same digest every time.

    Returns:
        str: Hash of the root tree
    """
    root = Tree(build_tree_entries(repo, entries))
    return repo.write_object(root)


def format_author(name: str, email: str) -> str:
    """Format an author line as 'Name <email>'."""
    return f"{name} <{email}>"


def commit_index(repo, message: str, author: str, timestamp: Optional[int] = None) -> str:
    """
    Record the staged files as a new commit.

    Steps run in order and each only if the previous one succeeded:
    write the trees, write the commit, advance HEAD, clear the index.
    A failure part way leaves HEAD and the index as they were.

    Args:
        repo: Repository instance
        message: Commit message
        author: Author as 'Name <email>'
        timestamp: Unix time (defaults to now)

    Returns:
        str: Hash of the new commit

    Raises:
        NothingToCommitError: If the index is empty
        RepositoryLockedError: If another process holds the repository
    """
    with RepoLock(repo):
        index = Index.load(repo.index_file)
        if len(index) == 0:
            raise NothingToCommitError()

        tree_hash = write_tree(repo, index.sorted_entries())
        parent = repo.refs.resolve_head()

        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hash=parent,
            author=author,
            message=message,
            timestamp=timestamp,
        )
        commit_hash = repo.write_object(commit)

        repo.refs.update_head(commit_hash)

        index.clear()
        index.write(repo.index_file)

    logger.debug("Committed %s (tree %s)", commit_hash[:8], tree_hash[:8])
    return commit_hash
