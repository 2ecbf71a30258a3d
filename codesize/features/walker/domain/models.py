from dataclasses import dataclass
from enum import Enum, unique
from pathlib import Path
from typing import Optional

@dataclass(frozen=True)
class FileEntry:
    """
    A regular file discovered by a walker.

    `fd` is only set by the descriptor strategy. It stays owned by the
    walker and is closed as soon as the visitor returns, so visitors
    must not keep it or close it themselves.
    """
    path: Path
    size: int
    fd: Optional[int] = None

    @property
    def name(self) -> str:
        return self.path.name

@unique
class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"

@dataclass(frozen=True)
class DirectoryEntry:
    """
    One classified child of a directory, as seen by the path-based walkers.
    """
    path: Path
    kind: EntryKind
    size: int = 0
