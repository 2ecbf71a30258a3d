import logging
import os
from pathlib import Path
from typing import List

from codesize.core.errors import IoError, OpenError
from ..domain.interfaces import IFileWalker, Visitor
from ..domain.models import DirectoryEntry, EntryKind, FileEntry

logger = logging.getLogger(__name__)

def list_directory(dir_path: Path) -> List[DirectoryEntry]:
    """
    Enumerates and classifies the children of `dir_path` without following
    symlinks. The directory handle is released before returning, so callers
    can recurse without holding one handle per level.
    """
    try:
        iterator = os.scandir(dir_path)
    except OSError as e:
        raise OpenError(e.strerror or str(e), dir_path, "open directory") from e

    entries: List[DirectoryEntry] = []
    with iterator:
        try:
            for item in iterator:
                entries.append(_classify(item))
        except OSError as e:
            raise IoError(e.strerror or str(e), dir_path, "read directory") from e
    return entries

def _classify(item: os.DirEntry) -> DirectoryEntry:
    path = Path(item.path)
    if item.is_file(follow_symlinks=False):
        return DirectoryEntry(path, EntryKind.FILE, item.stat(follow_symlinks=False).st_size)
    if item.is_dir(follow_symlinks=False) and item.name not in (".", ".."):
        return DirectoryEntry(path, EntryKind.DIRECTORY)
    return DirectoryEntry(path, EntryKind.OTHER)


class MetadataFileWalker(IFileWalker):
    """
    Portable walker built on os.scandir; types and sizes come from
    path metadata instead of open descriptors.
    """

    def walk(self, root: Path, visit: Visitor) -> None:
        self._walk_directory(Path(root), visit)

    def _walk_directory(self, dir_path: Path, visit: Visitor) -> None:
        for entry in list_directory(dir_path):
            if entry.kind is EntryKind.FILE:
                visit(FileEntry(path=entry.path, size=entry.size))
            elif entry.kind is EntryKind.DIRECTORY:
                self._walk_directory(entry.path, visit)
            else:
                logger.debug(f"Skipping non-regular entry: {entry.path}")
