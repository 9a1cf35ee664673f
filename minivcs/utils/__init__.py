"""Utilities module for common helper functions.

This module contains:
- Filesystem utilities (atomic writes, path normalisation)
- Ignore file handling (.vcsignore)
"""

from minivcs.utils.ignore import IgnoreMatcher, IgnorePattern, load_ignore_matcher

__all__ = [
    'IgnoreMatcher', 'IgnorePattern', 'load_ignore_matcher',
]
