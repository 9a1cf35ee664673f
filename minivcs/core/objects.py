"""Stored objects for minivcs.

Every object is stored as ``<type> <size>\\0<payload>``. The payload of a
blob is the raw file content, a tree is a sequence of binary entries, and
a commit is a short block of text headers followed by the message.
"""

import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from .errors import CorruptObjectError, InvalidInputError
from .hash import DIGEST_SIZE, hash_object, is_hex_digest

FILE_MODE = '100644'
EXECUTABLE_MODE = '100755'
DIR_MODE = '40000'


class VcsObject(ABC):
    """Base class for all stored objects."""

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize the object payload, without the type header.

        Returns:
            bytes: Payload data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Load the object payload.

        Args:
            data: Payload data, without the type header
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def encode(self) -> bytes:
        """Return the full on-disk encoding, header included."""
        data = self.serialize()
        header = f"{self.type} {len(data)}\0".encode()
        return header + data

    def compute_hash(self) -> str:
        """
        Compute the object hash.

        The hash covers the header as well as the payload, so a blob and
        a tree with identical payloads never share a digest.

        Returns:
            str: 40-character SHA-1 hash
        """
        return hash_object(self.encode())

    @property
    def hash(self) -> str:
        return self.compute_hash()

    def __eq__(self, other) -> bool:
        if not isinstance(other, VcsObject):
            return NotImplemented
        return self.type == other.type and self.serialize() == other.serialize()

    __hash__ = None


class Blob(VcsObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


@dataclass
class TreeEntry:
    """
    A single entry in a tree.

    mode is '40000' for a subdirectory, otherwise a file mode such
    as '100644'. name is one path segment. hash names a blob or a tree.
    """
    mode: str
    name: str
    hash: str

    @property
    def is_tree(self) -> bool:
        return self.mode == DIR_MODE

    @property
    def type(self) -> str:
        return 'tree' if self.is_tree else 'blob'

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


def validate_entry_name(name: str) -> None:
    """Raise InvalidInputError unless name is a single path segment."""
    if not name or name in ('.', '..'):
        raise InvalidInputError(f"Invalid tree entry name: {name!r}")
    if '/' in name or '\\' in name or '\0' in name:
        raise InvalidInputError(f"Tree entry name must be a single path segment: {name!r}")
    try:
        name.encode('utf-8')
    except UnicodeEncodeError:
        raise InvalidInputError(f"Tree entry name is not valid UTF-8: {name!r}")


class Tree(VcsObject):
    """
    Represents one directory level.

    Entries keep the order they were added in. Encoding never reorders
    them, so whoever builds a tree decides its canonical order.
    """

    def __init__(self, entries: Optional[List[TreeEntry]] = None):
        self.entries: List[TreeEntry] = []
        for entry in entries or []:
            self.add_entry(entry.mode, entry.name, entry.hash)

    def add_entry(self, mode: str, name: str, obj_hash: str) -> TreeEntry:
        """
        Append an entry to the tree.

        Args:
            mode: File mode, or DIR_MODE for a subtree
            name: Entry name (single path segment, unique in this tree)
            obj_hash: Hex digest of the referenced object

        Returns:
            TreeEntry: The new entry

        Raises:
            InvalidInputError: If the name is invalid or already present,
                or the digest is not a full hex digest
        """
        validate_entry_name(name)
        if not re.fullmatch(r'[0-7]+', mode):
            raise InvalidInputError(f"Invalid mode for {name!r}: {mode!r}")
        if not is_hex_digest(obj_hash):
            raise InvalidInputError(f"Invalid object hash for {name!r}: {obj_hash!r}")
        if self.get_entry(name) is not None:
            raise InvalidInputError(f"Duplicate tree entry: {name}")

        entry = TreeEntry(mode, name, obj_hash.lower())
        self.entries.append(entry)
        return entry

    def get_entry(self, name: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format: <mode> <name>\\0<20-byte hash>, repeated per entry.
        The hash is the only binary field of the whole object format.

        Returns:
            bytes: Serialized tree data
        """
        parts = []
        for entry in self.entries:
            parts.append(f"{entry.mode} {entry.name}".encode())
            parts.append(b'\0')
            parts.append(bytes.fromhex(entry.hash))
        return b''.join(parts)

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree entries.

        Args:
            data: Serialized tree data

        Raises:
            CorruptObjectError: On a truncated or malformed entry
        """
        self.entries = []
        pos = 0

        while pos < len(data):
            space_pos = data.find(b' ', pos)
            if space_pos == -1:
                raise CorruptObjectError("Invalid tree format: missing mode separator")

            null_pos = data.find(b'\0', space_pos + 1)
            if null_pos == -1:
                raise CorruptObjectError("Invalid tree format: missing name terminator")

            try:
                mode = data[pos:space_pos].decode('ascii')
                name = data[space_pos + 1:null_pos].decode('utf-8')
            except UnicodeDecodeError as e:
                raise CorruptObjectError(f"Invalid tree format: {e}")

            hash_start = null_pos + 1
            hash_end = hash_start + DIGEST_SIZE
            if hash_end > len(data):
                raise CorruptObjectError("Invalid tree format: hash too short")

            try:
                self.add_entry(mode, name, data[hash_start:hash_end].hex())
            except InvalidInputError as e:
                raise CorruptObjectError(f"Invalid tree format: {e}")

            pos = hash_end

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(VcsObject):
    """
    Represents a commit.

    A commit captures:
    - Snapshot of project (tree hash)
    - At most one parent commit, so history is a simple chain
    - Author ("Name <email>")
    - Timestamp (Unix seconds)
    - Commit message
    """

    def __init__(self):
        self.tree: str = ''
        self.parent: Optional[str] = None
        self.author: str = ''
        self.timestamp: int = 0
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (absent for a root commit)
        author <author>
        timestamp <unix-seconds>

        <commit message, verbatim>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']
        if self.parent:
            lines.append(f'parent {self.parent}')
        lines.append(f'author {self.author}')
        lines.append(f'timestamp {self.timestamp}')

        header = '\n'.join(lines) + '\n\n'
        return (header + self.message).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit.

        Headers run until the first blank line; everything after it is
        the message, newlines included.

        Args:
            data: Serialized commit data

        Raises:
            CorruptObjectError: If the payload is not UTF-8 or a required
                header is missing or malformed
        """
        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"Commit is not valid UTF-8: {e}")

        head, _, message = content.partition('\n\n')

        tree = None
        parent = None
        author = None
        timestamp = None

        for line in head.split('\n'):
            key, _, value = line.partition(' ')
            if key == 'tree':
                tree = value
            elif key == 'parent':
                parent = value
            elif key == 'author':
                author = value
            elif key == 'timestamp':
                try:
                    timestamp = int(value)
                except ValueError:
                    raise CorruptObjectError(f"Invalid timestamp in commit: {value!r}")

        if tree is None:
            raise CorruptObjectError("Missing tree in commit")
        if author is None:
            raise CorruptObjectError("Missing author in commit")
        if timestamp is None:
            raise CorruptObjectError("Missing timestamp in commit")
        if not is_hex_digest(tree):
            raise CorruptObjectError(f"Invalid tree hash in commit: {tree!r}")
        if parent is not None and not is_hex_digest(parent):
            raise CorruptObjectError(f"Invalid parent hash in commit: {parent!r}")

        self.tree = tree
        self.parent = parent
        self.author = author
        self.timestamp = timestamp
        self.message = message

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        message: str,
        timestamp: Optional[int] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Hash of the previous commit, None for a root commit
            author: Author name and email (e.g., "Name <email>")
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit object
        """
        if '\n' in author:
            raise InvalidInputError("Author must not contain newlines")

        commit = cls()
        commit.tree = tree_hash
        commit.parent = parent_hash
        commit.author = author
        commit.message = message
        commit.timestamp = int(time.time()) if timestamp is None else timestamp
        return commit

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split('\n', 1)[0]

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{self.summary[:50]}')"


OBJECT_TYPES: Dict[str, Type[VcsObject]] = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}


def encode_object(obj: VcsObject) -> bytes:
    """Encode an object with its type header."""
    return obj.encode()


def decode_object(data: bytes, digest: Optional[str] = None) -> VcsObject:
    """
    Decode a full object encoding.

    Args:
        data: Bytes in the form <type> <size>\\0<payload>
        digest: Digest the data was read under, used in error messages

    Returns:
        VcsObject: Blob, Tree or Commit

    Raises:
        CorruptObjectError: On a bad header, a size mismatch, an unknown
            type or a malformed payload
    """
    null_idx = data.find(b'\0')
    if null_idx == -1:
        raise CorruptObjectError("Invalid object format", digest)

    try:
        header = data[:null_idx].decode('ascii')
    except UnicodeDecodeError:
        raise CorruptObjectError("Invalid object header", digest)

    parts = header.split()
    if len(parts) != 2:
        raise CorruptObjectError(f"Invalid object header: {header!r}", digest)

    obj_type, size_str = parts
    try:
        size = int(size_str)
    except ValueError:
        raise CorruptObjectError(f"Invalid object header: {header!r}", digest)

    payload = data[null_idx + 1:]
    if len(payload) != size:
        raise CorruptObjectError(
            f"Object size mismatch: expected {size}, got {len(payload)}", digest
        )

    obj_class = OBJECT_TYPES.get(obj_type)
    if obj_class is None:
        raise CorruptObjectError(f"Unknown object type: {obj_type}", digest)

    obj = obj_class()
    try:
        obj.deserialize(payload)
    except CorruptObjectError as e:
        if digest and e.digest is None:
            raise CorruptObjectError(e.reason, digest)
        raise
    return obj
