from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from .models import TrackedFile

class ITrackedFileSource(ABC):
    """
    Contract for listing tracked files in place of a directory walk.
    """
    @abstractmethod
    def list_files(self, root: Path) -> Iterator[TrackedFile]:
        """
        Yields every tracked regular file of the repository at `root`.

        Raises:
            SourceError: the listing cannot be produced.
        """
        pass
