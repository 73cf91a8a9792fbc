"""Filesystem scanning for directory snapshots."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .types import DirectorySnapshot, EntryKind, FileEntry

LOGGER = logging.getLogger(__name__)


def _entry_kind(child: os.DirEntry) -> EntryKind:
    """Classify one scandir entry, following symlinks like ``Path.is_dir``."""
    try:
        if child.is_dir():
            return EntryKind.DIRECTORY
        if child.is_file():
            return EntryKind.FILE
    except OSError:
        pass
    return EntryKind.OTHER


def list_directory_children(directory: Path) -> tuple[list[FileEntry], Exception | None]:
    """List immediate children of ``directory`` in enumeration order.

    Returns ``(children, scan_error)``. ``scan_error`` is set and ``children``
    is empty when the directory cannot be opened or read.
    """
    children: list[FileEntry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                children.append(
                    FileEntry(
                        name=child.name,
                        path=Path(child.path),
                        kind=_entry_kind(child),
                    )
                )
    except OSError as exc:
        return [], exc
    return children, None


def partition_directories_first(children: list[FileEntry]) -> tuple[FileEntry, ...]:
    """Stable partition: directories before everything else, no secondary key."""
    directories = [child for child in children if child.is_dir]
    others = [child for child in children if not child.is_dir]
    return tuple(directories + others)


def build_directory_snapshot(directory: Path) -> DirectorySnapshot:
    """Scan ``directory`` into a snapshot; unreadable directories yield an empty one."""
    children, scan_error = list_directory_children(directory)
    if scan_error is not None:
        LOGGER.debug("Cannot scan %s: %s", directory, scan_error)
        return DirectorySnapshot.empty(directory)
    return DirectorySnapshot(
        source_path=directory,
        entries=partition_directories_first(children),
    )


__all__ = [
    "list_directory_children",
    "partition_directories_first",
    "build_directory_snapshot",
]
