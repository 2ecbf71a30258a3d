from abc import ABC, abstractmethod

from codesize.core.common.enums import MetricKind
from codesize.features.walker.domain.models import FileEntry

class IMetricReader(ABC):
    """
    Contract for turning a discovered file into a single metric value.
    """
    @abstractmethod
    def read_metric(self, kind: MetricKind, entry: FileEntry) -> int:
        """
        FILES -> 1, BYTES -> metadata size, LINES -> number of b"\\n" bytes.

        Raises:
            OpenError: the file has to be opened and cannot be.
            IoError: reading the content fails.
        """
        pass

class IAsyncMetricReader(ABC):
    @abstractmethod
    async def read_metric(self, kind: MetricKind, entry: FileEntry) -> int:
        """Same rules as IMetricReader, suspending on every chunk read."""
        pass
