from abc import ABC, abstractmethod
from pathlib import Path
from typing import Awaitable, Callable

from .models import FileEntry

Visitor = Callable[[FileEntry], None]
AsyncVisitor = Callable[[FileEntry], Awaitable[None]]

class IFileWalker(ABC):
    """
    Contract for traversing a filesystem depth-first.
    Abstracts descriptor-relative traversal vs plain path traversal.
    """
    @abstractmethod
    def walk(self, root: Path, visit: Visitor) -> None:
        """
        Calls `visit` once per regular file under `root`, in directory
        enumeration order.

        Raises:
            OpenError: root (or an entry) cannot be opened.
            IoError: a directory cannot be enumerated.
        Any exception raised by `visit` aborts the walk and propagates.
        """
        pass

class IAsyncFileWalker(ABC):
    """
    Contract for concurrent traversal. Visits may run in any order.
    """
    @abstractmethod
    async def walk(self, root: Path, visit: AsyncVisitor) -> None:
        """
        Awaits `visit` once per regular file under `root`.
        The first error cancels outstanding work and is re-raised.
        """
        pass
