"""Index (staging area) implementation."""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from minivcs.utils.fs import atomic_write_text, to_posix
from .errors import CorruptIndexError
from .objects import FILE_MODE

logger = logging.getLogger(__name__)


@dataclass
class IndexEntry:
    """
    Represents a single staged file.

    path is relative to the work tree and always uses '/' separators.
    """
    path: str           # Worktree-relative path
    hash: str           # Blob hash of the staged content
    size: int           # Size of the staged content in bytes
    mode: str = FILE_MODE

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode} {self.hash[:7]} {self.path})"


class Index:
    """
    The staging area.

    Holds at most one entry per path. Order of insertion does not matter:
    the index is saved sorted by path, and sorted_entries() gives the
    order the tree builder expects.

    On disk the index is a JSON list of entries. It is replaced atomically
    on every save, so a reader never sees a half-written file.
    """

    def __init__(self):
        self.entries: Dict[str, IndexEntry] = {}

    @classmethod
    def load(cls, index_path) -> 'Index':
        """Read an index file into a new Index."""
        index = cls()
        index.read(index_path)
        return index

    def add_entry(self, path: str, hash: str, size: int, mode: str = FILE_MODE) -> IndexEntry:
        """
        Add or replace the entry for path.

        Args:
            path: File path relative to repository root
            hash: Blob hash of the staged content
            size: Content size in bytes
            mode: File mode string

        Returns:
            IndexEntry: The stored entry
        """
        path = to_posix(path)
        entry = IndexEntry(path=path, hash=hash, size=size, mode=mode or FILE_MODE)
        self.entries[path] = entry
        return entry

    def remove_entry(self, path: str) -> bool:
        """
        Remove entry from index.

        Returns:
            True if an entry was removed
        """
        path = to_posix(path)
        if path in self.entries:
            del self.entries[path]
            return True
        return False

    def remove_overlapping(self, path: str) -> List[str]:
        """
        Drop entries that cannot coexist with a file at path.

        A file at 'a/b' rules out a file at 'a' (now a directory), and a
        file at 'a' rules out anything staged below 'a/'.

        Returns:
            Removed paths, sorted
        """
        path = to_posix(path)
        parts = path.split('/')
        parents = {'/'.join(parts[:i]) for i in range(1, len(parts))}
        below = path + '/'

        removed = sorted(p for p in self.entries if p in parents or p.startswith(below))
        for p in removed:
            del self.entries[p]
        return removed

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        """Get entry by path."""
        return self.entries.get(to_posix(path))

    def clear(self) -> None:
        """Clear all entries from index."""
        self.entries.clear()

    def sorted_entries(self) -> List[IndexEntry]:
        """Entries ordered by path."""
        return [self.entries[path] for path in sorted(self.entries)]

    def write(self, index_path) -> None:
        """
        Write index to disk.

        Args:
            index_path: Path to index file
        """
        data = [asdict(entry) for entry in self.sorted_entries()]
        atomic_write_text(index_path, json.dumps(data, indent=2))
        logger.debug("Saved index with %d entries", len(data))

    def read(self, index_path) -> None:
        """
        Read index from disk.

        A missing file is an empty index. Entries written before modes were
        tracked get the regular file mode.

        Args:
            index_path: Path to index file

        Raises:
            CorruptIndexError: If the file is not a valid index
        """
        self.entries.clear()
        index_path = Path(index_path)

        if not index_path.exists():
            return

        try:
            data = json.loads(index_path.read_text(encoding='utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptIndexError(index_path, str(e))

        if not isinstance(data, list):
            raise CorruptIndexError(index_path, "expected a list of entries")

        for item in data:
            try:
                self.add_entry(
                    path=item['path'],
                    hash=item['hash'],
                    size=int(item.get('size', 0)),
                    mode=item.get('mode') or FILE_MODE,
                )
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise CorruptIndexError(index_path, f"invalid entry {item!r}: {e}")

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path: str) -> bool:
        return to_posix(path) in self.entries

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.sorted_entries())

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
