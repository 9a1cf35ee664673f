"""Operations module for high-level minivcs operations.

This module contains the logic behind the commands:
- Staging and unstaging files
- Building trees and recording commits
- Status computation
- History traversal
"""

from minivcs.operations.staging import stage_paths, unstage_paths, stage_file, normalize_line_endings
from minivcs.operations.commit import build_tree_entries, write_tree, commit_index, format_author
from minivcs.operations.status import StatusEngine, StatusReport, compute_status, flatten_tree
from minivcs.operations.history import iter_history

__all__ = [
    'stage_paths', 'unstage_paths', 'stage_file', 'normalize_line_endings',
    'build_tree_entries', 'write_tree', 'commit_index', 'format_author',
    'StatusEngine', 'StatusReport', 'compute_status', 'flatten_tree',
    'iter_history',
]
