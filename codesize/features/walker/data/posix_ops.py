import logging
import os
from pathlib import Path
from typing import List, Optional

from codesize.core.errors import IoError

logger = logging.getLogger(__name__)

class PosixOps:
    """
    Thin seam over the descriptor-level os primitives.
    Tests substitute a counting subclass to audit open/close pairs.
    """

    def open(self, path: str, flags: int, dir_fd: Optional[int] = None) -> int:
        return os.open(path, flags, dir_fd=dir_fd)

    def close(self, fd: int) -> None:
        os.close(fd)

    def fstat(self, fd: int) -> os.stat_result:
        return os.fstat(fd)

    def list_names(self, fd: int) -> List[str]:
        return os.listdir(fd)


class OwnedDescriptor:
    """
    Takes ownership of a raw descriptor and closes it exactly once.

    Use as a context manager; `close()` is idempotent so an early
    explicit close and the `__exit__` close never double-close.
    """

    def __init__(self, fd: int, ops: PosixOps, path: Path):
        self._fd: Optional[int] = fd
        self._ops = ops
        self.path = path

    @property
    def fd(self) -> int:
        if self._fd is None:
            raise ValueError(f"Descriptor for {self.path} is already closed")
        return self._fd

    @property
    def closed(self) -> bool:
        return self._fd is None

    def close(self) -> None:
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            self._ops.close(fd)
        except OSError as e:
            raise IoError(e.strerror or str(e), self.path, "close") from e

    def __enter__(self) -> "OwnedDescriptor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Already unwinding: the in-flight error wins over a failed close
        try:
            self.close()
        except IoError as close_error:
            logger.warning(f"{close_error} (while handling {exc_type.__name__})")
