"""Domain model for single-directory listings.

This package contains non-UI listing primitives:
- entry and snapshot datatypes
- filesystem scanning with directories-first ordering
"""

from __future__ import annotations

from .types import DirectorySnapshot, EntryKind, FileEntry
from .fs import build_directory_snapshot, list_directory_children, partition_directories_first

__all__ = [
    "EntryKind",
    "FileEntry",
    "DirectorySnapshot",
    "list_directory_children",
    "partition_directories_first",
    "build_directory_snapshot",
]
