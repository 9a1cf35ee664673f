"""Ignore rules read from .vcsignore files."""

import re
from pathlib import Path
from typing import Iterable, List

IGNORE_FILE_NAME = '.vcsignore'


def _translate(glob: str) -> str:
    """Translate the body of a gitignore glob into a regex fragment."""
    out = []
    i = 0
    n = len(glob)

    while i < n:
        c = glob[i]

        if c == '*':
            if glob.startswith('**/', i):
                # zero or more leading directories
                out.append('(?:.*/)?')
                i += 3
            elif glob.startswith('**', i):
                out.append('.*')
                i += 2
            else:
                out.append('[^/]*')
                i += 1
        elif c == '?':
            out.append('[^/]')
            i += 1
        elif c == '[':
            end = i + 1
            if end < n and glob[end] == '!':
                end += 1
            if end < n and glob[end] == ']':
                end += 1
            while end < n and glob[end] != ']':
                end += 1

            if end >= n:
                out.append(re.escape(c))
                i += 1
            else:
                body = glob[i + 1:end]
                if body.startswith('!'):
                    body = '^' + body[1:]
                out.append('[' + body.replace('\\', '\\\\') + ']')
                i = end + 1
        else:
            out.append(re.escape(c))
            i += 1

    return ''.join(out)


class IgnorePattern:
    """
    One line of an ignore file.

    A pattern without a slash matches at any depth; a pattern with a
    leading or inner slash is relative to the repository root. A trailing
    slash restricts it to directories, which also covers everything
    beneath them. A leading '!' re-includes what earlier lines excluded.
    """

    def __init__(self, pattern: str, negation: bool = False, directory_only: bool = False):
        self.original = pattern
        self.negation = negation
        self.directory_only = directory_only

        anchored = pattern.startswith('/') or '/' in pattern.rstrip('/')
        body = _translate(pattern.lstrip('/'))

        prefix = '^' if anchored else '(?:^|/)'
        self._regex = re.compile(prefix + body + '(?:/.*)?$')
        self._exact_regex = re.compile(prefix + body + '$')
        self._inside_regex = re.compile(prefix + body + '/.*$')

    @classmethod
    def parse(cls, line: str):
        """Build a pattern from an ignore-file line, or None for blanks and comments."""
        line = line.strip()
        if not line or line.startswith('#'):
            return None

        negation = line.startswith('!')
        if negation:
            line = line[1:]

        directory_only = line.endswith('/')
        if directory_only:
            line = line.rstrip('/')

        if not line:
            return None
        return cls(line, negation, directory_only)

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path matches this pattern.

        Args:
            path: Path relative to the repository root
            is_dir: Whether the path itself is a directory
        """
        path = path.replace('\\', '/')
        if path.startswith('./'):
            path = path[2:]

        if not self.directory_only:
            return bool(self._regex.search(path))

        # Directory-only patterns hit the directory itself, or anything
        # below a matching directory.
        if is_dir and self._exact_regex.search(path):
            return True
        return bool(self._inside_regex.search(path))

    def __repr__(self) -> str:
        return f"IgnorePattern({self.original!r})"


class IgnoreMatcher:
    """Matches paths against an ordered list of ignore patterns."""

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: List[IgnorePattern] = []
        self._cache: dict = {}
        self.add_patterns(patterns)

    def add_pattern(self, line: str) -> None:
        pattern = IgnorePattern.parse(line)
        if pattern is not None:
            self.patterns.append(pattern)
            self._cache.clear()

    def add_patterns(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.add_pattern(line)

    def load_file(self, path: Path) -> bool:
        """
        Load patterns from an ignore file.

        Returns:
            True if the file existed and was read
        """
        if not path.is_file():
            return False
        self.add_patterns(path.read_text(encoding='utf-8', errors='replace').splitlines())
        return True

    def should_ignore(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored.

        The last matching pattern wins, so negations can re-include paths.

        Args:
            path: Path relative to the repository root
            is_dir: Whether the path is a directory
        """
        cache_key = (path, is_dir)
        if cache_key not in self._cache:
            ignored = False
            for pattern in self.patterns:
                if pattern.matches(path, is_dir):
                    ignored = not pattern.negation
            self._cache[cache_key] = ignored
        return self._cache[cache_key]


def load_ignore_matcher(work_tree: Path) -> IgnoreMatcher:
    """
    Create the matcher for a repository.

    The .vcs directory is always ignored; .vcsignore in the work tree
    root adds to that when present.
    """
    matcher = IgnoreMatcher(['.vcs/'])
    matcher.load_file(Path(work_tree) / IGNORE_FILE_NAME)
    return matcher
