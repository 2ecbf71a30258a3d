from pathlib import Path
from typing import Optional, Union


class CodesizeError(Exception):
    """
    Base class for every error that aborts a scan.
    Carries the path and the operation that failed so the CLI can log
    a useful message without a traceback.
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, operation: Optional[str] = None):
        self.message = message
        self.path = str(path) if path is not None else None
        self.operation = operation
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.operation and self.path:
            return f"{self.operation} failed for {self.path}: {self.message}"
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class OpenError(CodesizeError):
    """Root or entry cannot be opened (missing, wrong type, permission denied)."""


class IoError(CodesizeError):
    """Read failure during metric extraction or directory enumeration."""


class SourceError(CodesizeError):
    """The tracked-file source failed to produce its listing."""


class CollectorStateError(CodesizeError):
    """A collector was used after its results were rendered."""
