"""Advisory repository lock.

Operations that change the index or the history pointer hold an
exclusive lock on .vcs/index.lock for their whole duration. The attempt
never blocks: if another process holds the lock, RepositoryLockedError is
raised straight away.

The object store is not covered by the lock. It is append-only and
content-addressed, so concurrent writers can only repeat each other.
"""

import errno
import fcntl
import logging
import os

from .errors import RepositoryLockedError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5


class RepoLock:
    """
    Exclusive lock scoped to one repository.

    Use as a context manager:

        with RepoLock(repo):
            ...

    The lock is released and the lock file removed on exit, whether or
    not the body raised.
    """

    def __init__(self, repo):
        self.repo = repo
        self.lock_path = repo.lock_file
        self._fd = None

    @property
    def is_held(self) -> bool:
        return self._fd is not None

    def _lock_file(self) -> int:
        fd = os.open(str(self.lock_path), os.O_RDWR | os.O_CREAT, 0o644)
        try:
            # LOCK_NB makes flock fail instead of waiting.
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            os.close(fd)
            if e.errno in (errno.EAGAIN, errno.EACCES, errno.EWOULDBLOCK):
                raise RepositoryLockedError(self.lock_path)
            raise
        return fd

    def _is_current(self, fd: int) -> bool:
        """True if fd is still the file found at the lock path."""
        try:
            on_disk = os.stat(str(self.lock_path))
        except FileNotFoundError:
            return False
        held = os.fstat(fd)
        return (held.st_dev, held.st_ino) == (on_disk.st_dev, on_disk.st_ino)

    def acquire(self) -> None:
        """
        Take the lock.

        A previous holder removes the lock file when it releases, so the
        file locked here may already be unlinked. That lock protects
        nothing; it is dropped and the current file is tried instead.

        Raises:
            RepositoryLockedError: If another holder has it
        """
        for _ in range(MAX_ATTEMPTS):
            fd = self._lock_file()
            if self._is_current(fd):
                self._fd = fd
                logger.debug("Acquired lock %s", self.lock_path)
                return

            logger.debug("Lock file %s was replaced, retrying", self.lock_path)
            os.close(fd)

        raise RepositoryLockedError(self.lock_path)

    def release(self) -> None:
        if self._fd is None:
            return

        try:
            os.unlink(str(self.lock_path))
        except FileNotFoundError:
            pass
        finally:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
            os.close(self._fd)
            self._fd = None

        logger.debug("Released lock %s", self.lock_path)

    def __enter__(self) -> 'RepoLock':
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()
