"""Walking commit history."""

from typing import Iterator, Optional, Tuple

from minivcs.core.errors import CorruptObjectError
from minivcs.core.objects import Commit


def iter_history(repo, start: Optional[str] = None,
                 limit: Optional[int] = None) -> Iterator[Tuple[str, Commit]]:
    """
    Yield (hash, commit) pairs from newest to oldest.

    History is a simple chain: each commit has at most one parent.

    Args:
        repo: Repository instance
        start: Commit to start from (defaults to HEAD)
        limit: Maximum number of commits to yield

    Raises:
        ObjectNotFoundError: If a commit in the chain is missing
        CorruptObjectError: If the chain reaches something that is not a commit
    """
    commit_hash = start if start is not None else repo.refs.resolve_head()
    seen = set()
    count = 0

    while commit_hash and (limit is None or count < limit):
        if commit_hash in seen:
            raise CorruptObjectError("Commit history contains a cycle", commit_hash)
        seen.add(commit_hash)

        commit = repo.read_object(commit_hash)
        if not isinstance(commit, Commit):
            raise CorruptObjectError(f"Expected a commit, found a {commit.type}", commit_hash)

        yield commit_hash, commit
        count += 1
        commit_hash = commit.parent
