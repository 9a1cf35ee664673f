"""Status engine: compare the work tree, the index and HEAD."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from minivcs.core.errors import CorruptObjectError
from minivcs.core.index import Index
from minivcs.core.objects import Commit, Tree
from minivcs.operations.staging import walk_files, working_blob
from minivcs.utils.ignore import IgnoreMatcher, load_ignore_matcher

logger = logging.getLogger(__name__)


@dataclass
class StatusReport:
    """
    Per-path classification of the work tree.

    A path appears in at most one staged list and at most one unstaged
    list. staged_new/staged_modified can be paired with modified or
    deleted for the same path. Every list is sorted.
    """
    branch: Optional[str] = None
    head: Optional[str] = None
    staged_new: List[str] = field(default_factory=list)
    staged_modified: List[str] = field(default_factory=list)
    staged_deleted: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def has_staged(self) -> bool:
        return bool(self.staged_new or self.staged_modified or self.staged_deleted)

    @property
    def has_unstaged(self) -> bool:
        return bool(self.modified or self.deleted)

    @property
    def is_clean(self) -> bool:
        return not (self.has_staged or self.has_unstaged or self.untracked)

    def sort(self) -> None:
        for name in ('staged_new', 'staged_modified', 'staged_deleted',
                     'modified', 'deleted', 'untracked'):
            getattr(self, name).sort()


def flatten_tree(repo, tree_hash: str, prefix: str = '') -> Dict[str, str]:
    """
    Map every file below a tree to its blob hash.

    Args:
        repo: Repository instance
        tree_hash: Hash of the tree to flatten
        prefix: Path of that tree inside the root tree

    Returns:
        Dict of worktree-relative path to blob hash
    """
    tree = repo.read_object(tree_hash)
    if not isinstance(tree, Tree):
        raise CorruptObjectError(f"Expected a tree, found a {tree.type}", tree_hash)

    files = {}
    for entry in tree.entries:
        path = f"{prefix}/{entry.name}" if prefix else entry.name
        if entry.is_tree:
            files.update(flatten_tree(repo, entry.hash, path))
        else:
            files[path] = entry.hash
    return files


def head_files(repo) -> Dict[str, str]:
    """Flattened tree of the HEAD commit, empty when there are no commits."""
    head = repo.refs.resolve_head()
    if head is None:
        return {}

    commit = repo.read_object(head)
    if not isinstance(commit, Commit):
        raise CorruptObjectError("HEAD does not point to a commit", head)
    return flatten_tree(repo, commit.tree)


class StatusEngine:
    """
    Classifies every path found in the work tree, the index or HEAD.

    Nothing is written while computing a status.
    """

    def __init__(self, repo, matcher: Optional[IgnoreMatcher] = None):
        self.repo = repo
        self.matcher = matcher or load_ignore_matcher(repo.work_tree)

    def working_files(self) -> Dict[str, str]:
        """
        Hash every non-ignored work tree file as a blob.

        Content goes through the same line-ending normalisation as staging
        so hashes compare equal to stored ones.
        """
        files = {}
        for path in walk_files(self.repo, self.repo.work_tree, self.matcher):
            files[self.repo.relative_path(path)] = working_blob(path).hash
        return files

    def compute(self) -> StatusReport:
        """Build the status report."""
        repo = self.repo

        report = StatusReport(
            branch=repo.refs.current_branch(),
            head=repo.refs.resolve_head(),
        )

        head = head_files(repo)
        index = {entry.path: entry.hash for entry in Index.load(repo.index_file)}
        working = self.working_files()

        for path, working_hash in working.items():
            in_index = path in index
            in_head = path in head

            if in_index:
                index_hash = index[path]
                if in_head:
                    if index_hash != head[path]:
                        report.staged_modified.append(path)
                else:
                    report.staged_new.append(path)

                if working_hash != index_hash:
                    report.modified.append(path)
            elif in_head:
                if working_hash != head[path]:
                    report.modified.append(path)
            else:
                report.untracked.append(path)

        for path in index:
            if path in working:
                continue
            if path in head:
                report.staged_deleted.append(path)
            else:
                # Staged as new, then removed from disk before committing:
                # still staged, and deleted in the work tree.
                report.staged_new.append(path)
                report.deleted.append(path)

        for path in head:
            if path not in working and path not in index:
                report.deleted.append(path)

        report.sort()
        logger.debug("Status: %d working, %d staged, %d in HEAD",
                     len(working), len(index), len(head))
        return report


def compute_status(repo, matcher: Optional[IgnoreMatcher] = None) -> StatusReport:
    """Convenience wrapper around StatusEngine.compute()."""
    return StatusEngine(repo, matcher).compute()
