"""Repository management for minivcs."""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional

from minivcs.utils.fs import atomic_write, atomic_write_text
from .errors import (
    InvalidInputError,
    ObjectNotFoundError,
    PathOutsideWorktreeError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from .hash import hash_object, is_hex_digest
from .objects import VcsObject, decode_object

logger = logging.getLogger(__name__)

VCS_DIR_NAME = '.vcs'
DEFAULT_BRANCH = 'master'


class Repository:
    """
    Represents a minivcs repository.

    A repository is the context every operation runs against: it knows
    where the .vcs directory lives and reads and writes stored objects.
    Construct one per invocation and pass it around.
    """

    def __init__(self, path: str = '.'):
        """
        Args:
            path: Work tree root; the .vcs directory lives directly inside it
        """
        self.work_tree = Path(path).resolve()
        self.vcs_dir = self.work_tree / VCS_DIR_NAME
        self.objects_dir = self.vcs_dir / 'objects'
        self.refs_dir = self.vcs_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.vcs_dir / 'HEAD'
        self.index_file = self.vcs_dir / 'index'
        self.lock_file = self.vcs_dir / 'index.lock'
        self.config_file = self.vcs_dir / 'config'

        self._ref_manager = None

    @property
    def refs(self):
        """HEAD and branch refs of this repository."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    def init(self) -> 'Repository':
        """
        Create an empty repository.

        Lays out .vcs/ with objects/, refs/heads/, a HEAD naming the
        default branch (which has no commits yet), an empty index and a
        config file.

        Returns:
            Repository: self

        Raises:
            RepositoryExistsError: If repository already exists
        """
        if self.vcs_dir.exists():
            raise RepositoryExistsError(self.vcs_dir)

        self.vcs_dir.mkdir(parents=True)
        self.objects_dir.mkdir()
        self.heads_dir.mkdir(parents=True)

        atomic_write_text(self.head_file, f'ref: refs/heads/{DEFAULT_BRANCH}\n')
        atomic_write_text(self.index_file, '[]')
        atomic_write_text(self.config_file, '[core]\nrepositoryformatversion = 0\n')

        logger.debug("Initialized repository in %s", self.vcs_dir)
        return self

    def exists(self) -> bool:
        return self.vcs_dir.is_dir()

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Locate the repository that contains path.

        path itself and then each parent is checked for a .vcs directory.

        Returns:
            The innermost enclosing Repository, or None
        """
        start = Path(path).resolve()
        for candidate in [start, *start.parents]:
            if (candidate / VCS_DIR_NAME).is_dir():
                return cls(str(candidate))
        return None

    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but raise when there is no repository.

        Raises:
            RepositoryNotFoundError: If no .vcs directory is found
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise RepositoryNotFoundError(Path(path).resolve())
        return repo

    def object_path(self, hash: str) -> Path:
        """
        Location of the object with this digest.

        The first two hex digits name a fan-out directory under objects/,
        the other 38 the file inside it.
        """
        return self.objects_dir / hash[:2] / hash[2:]

    def write_object(self, obj: VcsObject) -> str:
        """
        Store an object and return its digest.

        Objects are write-once: if the path for the digest already exists
        the write is skipped, since the content is identical by
        construction.
        """
        data = obj.encode()
        hash = hash_object(data)
        path = self.object_path(hash)

        if path.exists():
            logger.debug("Object %s already stored, skipped", hash[:8])
            return hash

        atomic_write(path, data)

        logger.debug("Stored %s %s (%d bytes)", obj.type, hash[:8], len(data))
        return hash

    def read_object(self, hash: str) -> VcsObject:
        """
        Load and decode the object stored under a digest.

        Raises:
            InvalidInputError: If hash is not a full hex digest
            ObjectNotFoundError: If the object is not stored
            CorruptObjectError: If the stored bytes cannot be decoded
        """
        if not is_hex_digest(hash):
            raise InvalidInputError(f"Not a valid object hash: {hash!r}")

        path = self.object_path(hash)
        if not path.is_file():
            raise ObjectNotFoundError(hash)

        return decode_object(path.read_bytes(), hash)

    def object_exists(self, hash: str) -> bool:
        if not is_hex_digest(hash):
            return False
        return self.object_path(hash).is_file()

    def iter_objects(self) -> Iterator[str]:
        """Yield the digest of every stored object."""
        if not self.objects_dir.exists():
            return
        for subdir in sorted(self.objects_dir.iterdir()):
            if subdir.is_dir() and len(subdir.name) == 2:
                for obj_file in sorted(subdir.iterdir()):
                    if obj_file.name.startswith('.'):
                        continue
                    yield subdir.name + obj_file.name

    def relative_path(self, path) -> str:
        """
        Return path relative to the work tree, with forward slashes.

        Raises:
            PathOutsideWorktreeError: If path is not inside the work tree
        """
        full_path = Path(path)
        if not full_path.is_absolute():
            full_path = self.work_tree / full_path
        full_path = Path(os.path.normpath(full_path))

        try:
            rel_path = full_path.relative_to(self.work_tree)
        except ValueError:
            # The work tree is stored resolved; retry with symlinked
            # parent directories resolved too.
            try:
                rel_path = (full_path.parent.resolve() / full_path.name).relative_to(self.work_tree)
            except ValueError:
                raise PathOutsideWorktreeError(path, self.work_tree)

        return rel_path.as_posix()

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
