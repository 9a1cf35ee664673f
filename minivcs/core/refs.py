"""Reference management for minivcs."""

import logging
from pathlib import Path
from typing import Optional

from minivcs.utils.fs import atomic_write_text
from .errors import CorruptError

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages the history pointer.

    HEAD is either symbolic ("ref: refs/heads/<name>"), naming a ref file
    that holds a commit hash, or a raw commit hash (detached). There is a
    single mutable pointer; advancing it is the last thing a commit does
    before the index is cleared.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.vcs_dir = repo.vcs_dir
        self.head_file = repo.head_file

    def _read_head(self) -> Optional[str]:
        if not self.head_file.exists():
            return None
        return self.head_file.read_text().strip()

    def _ref_path(self, ref_name: str) -> Path:
        ref_path = (self.vcs_dir / ref_name).resolve()
        if self.vcs_dir.resolve() not in ref_path.parents:
            raise CorruptError(f"HEAD points outside the repository: {ref_name}")
        return ref_path

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference and return its commit hash.

        Args:
            ref_name: Reference path relative to .vcs (e.g. 'refs/heads/master')

        Returns:
            Commit hash or None if reference doesn't exist
        """
        ref_path = self._ref_path(ref_name)
        if not ref_path.is_file():
            return None

        content = ref_path.read_text().strip()
        return content or None

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash or None when there are no commits yet
        """
        content = self._read_head()
        if not content:
            return None

        if content.startswith(SYMREF_PREFIX):
            return self.read_ref(content[len(SYMREF_PREFIX):].strip())

        return content

    def head_ref(self) -> Optional[str]:
        """Ref path HEAD points to, or None when detached."""
        content = self._read_head()
        if content and content.startswith(SYMREF_PREFIX):
            return content[len(SYMREF_PREFIX):].strip()
        return None

    def current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if in detached HEAD state
        """
        ref = self.head_ref()
        if ref and ref.startswith(HEADS_PREFIX):
            return ref[len(HEADS_PREFIX):]
        return None

    def is_detached_head(self) -> bool:
        content = self._read_head()
        return bool(content) and not content.startswith(SYMREF_PREFIX)

    def update_head(self, commit_hash: str) -> None:
        """
        Point the history at a new commit.

        With a symbolic HEAD the referenced ref file is rewritten; with a
        detached HEAD, HEAD itself is. Both writes are atomic.

        Args:
            commit_hash: Commit hash to point to
        """
        ref = self.head_ref()
        if ref is not None:
            target = self._ref_path(ref)
        else:
            target = self.head_file

        atomic_write_text(target, commit_hash + '\n')
        logger.debug("Updated %s to %s", ref or 'HEAD', commit_hash[:8])
