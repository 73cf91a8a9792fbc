"""Domain datatypes for one directory listing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Filesystem type of a directory child."""

    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


@dataclass(frozen=True)
class FileEntry:
    """One immediate child of a scanned directory."""

    name: str
    path: Path
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True)
class DirectorySnapshot:
    """Immutable listing produced by one scan of ``source_path``.

    Directories come first; inside each group entries keep the order the
    filesystem enumerated them in. Snapshots are replaced wholesale.
    """

    source_path: Path
    entries: tuple[FileEntry, ...] = ()

    @classmethod
    def empty(cls, source_path: Path) -> "DirectorySnapshot":
        return cls(source_path=source_path, entries=())

    def __len__(self) -> int:
        return len(self.entries)

    def index_of(self, name: str) -> int | None:
        """Return the index of the first entry named exactly ``name``."""
        for idx, entry in enumerate(self.entries):
            if entry.name == name:
                return idx
        return None


__all__ = [
    "EntryKind",
    "FileEntry",
    "DirectorySnapshot",
]
