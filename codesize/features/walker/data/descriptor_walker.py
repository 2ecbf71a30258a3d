import errno
import logging
import os
import stat
from pathlib import Path
from typing import List, Optional

from codesize.core.errors import IoError, OpenError
from ..domain.interfaces import IFileWalker, Visitor
from ..domain.models import FileEntry
from .posix_ops import OwnedDescriptor, PosixOps

logger = logging.getLogger(__name__)

_CLOEXEC = getattr(os, "O_CLOEXEC", 0)

ROOT_FLAGS = os.O_RDONLY | os.O_DIRECTORY | _CLOEXEC

# O_NOFOLLOW: symlinks fail with ELOOP instead of being followed.
# O_NONBLOCK: opening a fifo or a tty must not hang the walk.
ENTRY_FLAGS = os.O_RDONLY | os.O_NOFOLLOW | os.O_NONBLOCK | _CLOEXEC

# Open failures that only mean "this is not a file or directory"
SKIPPABLE_ERRNOS = frozenset({errno.ELOOP, errno.EMLINK, errno.ENXIO, errno.EOPNOTSUPP})

class DescriptorFileWalker(IFileWalker):
    """
    Walks a tree by opening every entry relative to its already-open
    parent directory and classifying it with fstat on the new descriptor.

    Regular files are visited while their descriptor is still open, so
    metric readers can stream from `FileEntry.fd` without reopening.
    A root that is a regular file is rejected with OpenError.
    """

    def __init__(self, ops: Optional[PosixOps] = None):
        self.ops = ops or PosixOps()

    def walk(self, root: Path, visit: Visitor) -> None:
        root = Path(root)
        try:
            fd = self.ops.open(str(root), ROOT_FLAGS)
        except OSError as e:
            raise OpenError(e.strerror or str(e), root, "open directory") from e

        with OwnedDescriptor(fd, self.ops, root) as directory:
            self._walk_directory(root, directory, visit)

    def _walk_directory(self, dir_path: Path, directory: OwnedDescriptor, visit: Visitor) -> None:
        for name in self._list_names(dir_path, directory):
            if name in (".", ".."):
                continue

            entry_path = dir_path / name
            try:
                fd = self.ops.open(name, ENTRY_FLAGS, dir_fd=directory.fd)
            except OSError as e:
                if e.errno in SKIPPABLE_ERRNOS:
                    logger.debug(f"Skipping non-regular entry: {entry_path}")
                    continue
                raise OpenError(e.strerror or str(e), entry_path, "open") from e

            with OwnedDescriptor(fd, self.ops, entry_path) as handle:
                mode = self._fstat(entry_path, handle)
                if stat.S_ISREG(mode.st_mode):
                    visit(FileEntry(path=entry_path, size=mode.st_size, fd=handle.fd))
                elif stat.S_ISDIR(mode.st_mode):
                    self._walk_directory(entry_path, handle, visit)
                else:
                    logger.debug(f"Skipping special file: {entry_path}")

    def _list_names(self, dir_path: Path, directory: OwnedDescriptor) -> List[str]:
        try:
            return self.ops.list_names(directory.fd)
        except OSError as e:
            raise IoError(e.strerror or str(e), dir_path, "read directory") from e

    def _fstat(self, entry_path: Path, handle: OwnedDescriptor) -> os.stat_result:
        try:
            return self.ops.fstat(handle.fd)
        except OSError as e:
            raise IoError(e.strerror or str(e), entry_path, "stat") from e
