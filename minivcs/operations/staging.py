"""Staging and unstaging files."""

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from minivcs.core.errors import InvalidInputError
from minivcs.core.index import Index, IndexEntry
from minivcs.core.lock import RepoLock
from minivcs.core.objects import EXECUTABLE_MODE, FILE_MODE, Blob
from minivcs.utils.fs import to_posix
from minivcs.utils.ignore import IgnoreMatcher, load_ignore_matcher

logger = logging.getLogger(__name__)


def normalize_line_endings(data: bytes) -> bytes:
    """
    Convert CRLF and lone CR line endings to LF.

    Staging the same text from Windows and Unix then yields the same blob.
    """
    if b'\r' not in data:
        return data
    return data.replace(b'\r\n', b'\n').replace(b'\r', b'\n')


def file_mode(path: Path) -> str:
    """Best-effort mode string: executable or regular file."""
    st_mode = path.stat().st_mode
    return EXECUTABLE_MODE if st_mode & stat.S_IXUSR else FILE_MODE


def working_blob(path: Path) -> Blob:
    """Read a work tree file as the blob staging would store for it."""
    with open(path, 'rb') as f:
        return Blob(normalize_line_endings(f.read()))


def stage_file(repo, index: Index, path) -> IndexEntry:
    """
    Store a file's content and record it in the index.

    Args:
        repo: Repository instance
        index: Index to update (not saved here)
        path: File path, absolute or relative to the work tree

    Returns:
        IndexEntry: The new entry

    Raises:
        PathOutsideWorktreeError: If the file is not in the work tree
        InvalidInputError: If the path cannot be stored as UTF-8
    """
    file_path = Path(path)
    if not file_path.is_absolute():
        file_path = repo.work_tree / file_path

    rel_path = repo.relative_path(file_path)
    try:
        rel_path.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidInputError(f"File name is not valid UTF-8: {rel_path!r}")

    blob = working_blob(file_path)
    blob_hash = repo.write_object(blob)

    for stale in index.remove_overlapping(rel_path):
        logger.debug("Unstaged %s, replaced by %s", stale, rel_path)

    entry = index.add_entry(
        path=rel_path,
        hash=blob_hash,
        size=len(blob.data),
        mode=file_mode(file_path),
    )
    logger.debug("Staged %s as %s", rel_path, blob_hash[:8])
    return entry


def walk_files(repo, root: Path, matcher: IgnoreMatcher) -> Iterator[Path]:
    """
    Yield every non-ignored file below root, in sorted order.

    Ignored directories are not descended into.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)

        kept = []
        for name in sorted(dirnames):
            rel = repo.relative_path(current / name)
            if not matcher.should_ignore(rel, is_dir=True):
                kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            file_path = current / name
            if not file_path.is_file():
                continue
            if not matcher.should_ignore(repo.relative_path(file_path)):
                yield file_path


def stage_paths(repo, paths: Iterable, matcher: Optional[IgnoreMatcher] = None) -> List[str]:
    """
    Stage files and directories.

    Directories are walked recursively. Ignored files are skipped. The
    index is only saved once every path has been staged, so a bad path
    leaves it untouched.

    Args:
        repo: Repository instance
        paths: Files or directories, absolute or relative to the work tree
        matcher: Ignore rules (defaults to the repository's)

    Returns:
        List of staged worktree-relative paths

    Raises:
        InvalidInputError: If a path does not exist
        RepositoryLockedError: If another process holds the repository
    """
    if matcher is None:
        matcher = load_ignore_matcher(repo.work_tree)

    staged = []
    with RepoLock(repo):
        index = Index.load(repo.index_file)

        for path in paths:
            full_path = Path(path)
            if not full_path.is_absolute():
                full_path = repo.work_tree / full_path

            if not full_path.exists():
                raise InvalidInputError(f"Path does not exist: {path}")

            if full_path.is_file():
                rel_path = repo.relative_path(full_path)
                if matcher.should_ignore(rel_path):
                    logger.debug("Skipping ignored file %s", rel_path)
                    continue
                staged.append(stage_file(repo, index, full_path).path)
            elif full_path.is_dir():
                rel_dir = repo.relative_path(full_path)
                if rel_dir != '.' and matcher.should_ignore(rel_dir, is_dir=True):
                    logger.debug("Skipping ignored directory %s", rel_dir)
                    continue
                for file_path in walk_files(repo, full_path, matcher):
                    staged.append(stage_file(repo, index, file_path).path)

        index.write(repo.index_file)

    return staged


def unstage_paths(repo, paths: Iterable) -> List[str]:
    """
    Remove paths from the index.

    With no paths, every entry is removed.

    Args:
        repo: Repository instance
        paths: Absolute paths or paths relative to the work tree

    Returns:
        List of paths that were removed from the index
    """
    paths = list(paths)
    with RepoLock(repo):
        index = Index.load(repo.index_file)

        if not paths:
            removed = [entry.path for entry in index]
            index.clear()
        else:
            removed = []
            for path in paths:
                if Path(path).is_absolute():
                    rel_path = repo.relative_path(path)
                else:
                    rel_path = to_posix(str(path))
                if index.remove_entry(rel_path):
                    removed.append(rel_path)

        index.write(repo.index_file)

    return removed
