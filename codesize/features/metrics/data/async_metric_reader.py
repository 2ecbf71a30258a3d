from typing import BinaryIO, Optional

from codesize.core.common.enums import MetricKind
from codesize.core.concurrency import run_in_thread
from codesize.core.errors import IoError, OpenError
from codesize.features.walker.domain.models import FileEntry
from ..domain.interfaces import IAsyncMetricReader
from .metric_reader import NEWLINE, MetricReader

class AsyncMetricReader(IAsyncMetricReader):
    """
    Async counterpart of MetricReader. Opening the file and every chunk
    read are awaited in a worker thread, so many files stream at once.
    The file is never closed while a read is still running in a thread.
    """

    def __init__(self, chunk_size: Optional[int] = None):
        self.reader = MetricReader(chunk_size)

    async def read_metric(self, kind: MetricKind, entry: FileEntry) -> int:
        if kind is not MetricKind.LINES:
            return self.reader.read_metric(kind, entry)

        try:
            f = await run_in_thread(self._open, entry, on_abandon=lambda handle: handle.close())
        except OSError as e:
            raise OpenError(e.strerror or str(e), entry.path, "open") from e

        total = 0
        try:
            while True:
                try:
                    chunk = await run_in_thread(f.read, self.reader.chunk_size)
                except OSError as e:
                    raise IoError(e.strerror or str(e), entry.path, "read") from e
                if not chunk:
                    break
                total += chunk.count(NEWLINE)
        finally:
            f.close()
        return total

    def _open(self, entry: FileEntry) -> BinaryIO:
        return open(entry.path, "rb", buffering=0)
