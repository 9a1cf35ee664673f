"""Exceptions raised by minivcs operations.

Errors fall into four categories. Every concrete error derives from one
of them so callers can react to the category without knowing the detail:

- NotFoundError: a missing object or repository
- CorruptError: stored data that cannot be decoded
- ConflictError: the repository is locked by another process
- InvalidInputError: a request that cannot be satisfied as given
"""


class VcsError(Exception):
    """Base class for minivcs exceptions."""
    pass


class NotFoundError(VcsError):
    """Something that was asked for does not exist."""
    pass


class CorruptError(VcsError):
    """Stored data could not be decoded."""
    pass


class ConflictError(VcsError):
    """Another process holds the repository."""
    pass


class InvalidInputError(VcsError):
    """The request itself is invalid."""
    pass


class ObjectNotFoundError(NotFoundError):

    def __init__(self, digest):
        self.digest = digest
        super().__init__(f"Object {digest} not found")


class RepositoryNotFoundError(NotFoundError):

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Not a vcs repository (or any of the parent directories): {path}"
        )


class CorruptObjectError(CorruptError):

    def __init__(self, reason, digest=None):
        self.reason = reason
        self.digest = digest
        if digest:
            super().__init__(f"Corrupt object {digest}: {reason}")
        else:
            super().__init__(reason)


class CorruptIndexError(CorruptError):

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt index {path}: {reason}")


class RepositoryLockedError(ConflictError):

    def __init__(self, lock_path):
        self.lock_path = lock_path
        super().__init__(
            "Repository is locked. Another vcs process may be running. "
            f"If no other process is running, delete {lock_path} and try again."
        )


class RepositoryExistsError(InvalidInputError):

    def __init__(self, path):
        self.path = path
        super().__init__(f"Repository already exists at {path}")


class NothingToCommitError(InvalidInputError):

    def __init__(self):
        super().__init__("Nothing to commit (use 'vcs add' to stage files)")


class PathOutsideWorktreeError(InvalidInputError):

    def __init__(self, path, work_tree):
        self.path = path
        self.work_tree = work_tree
        super().__init__(f"Path {path} is not under worktree {work_tree}")


class ConfigKeyNotFoundError(InvalidInputError):

    def __init__(self, key):
        self.key = key
        super().__init__(f"Config key '{key}' not found")
