import os
from pathlib import Path
from typing import Callable, Optional

from codesize.core.common.enums import MetricKind
from codesize.core.config.settings import settings
from codesize.core.errors import IoError, OpenError
from codesize.features.walker.domain.models import FileEntry
from ..domain.interfaces import IMetricReader

NEWLINE = b"\n"

def count_newlines(read_chunk: Callable[[], bytes], path: Path) -> int:
    """
    Counts newline bytes until `read_chunk` returns b"".
    Short reads are fine; only an empty read ends the stream.
    """
    total = 0
    try:
        for chunk in iter(read_chunk, b""):
            total += chunk.count(NEWLINE)
    except OSError as e:
        raise IoError(e.strerror or str(e), path, "read") from e
    return total


class MetricReader(IMetricReader):
    def __init__(self, chunk_size: Optional[int] = None):
        self.chunk_size = chunk_size or settings.CHUNK_SIZE

    def read_metric(self, kind: MetricKind, entry: FileEntry) -> int:
        if kind is MetricKind.FILES:
            return 1
        if kind is MetricKind.BYTES:
            return entry.size
        return self.count_lines(entry)

    def count_lines(self, entry: FileEntry) -> int:
        # Reuse the walker's descriptor; it stays owned (and closed) by the walker
        if entry.fd is not None:
            return count_newlines(lambda: os.read(entry.fd, self.chunk_size), entry.path)

        try:
            f = open(entry.path, "rb", buffering=0)
        except OSError as e:
            raise OpenError(e.strerror or str(e), entry.path, "open") from e
        with f:
            return count_newlines(lambda: f.read(self.chunk_size), entry.path)
