from abc import ABC, abstractmethod
from typing import Optional, TextIO

class ICollector(ABC):
    """
    Contract for per-extension aggregation of one metric.
    A collector is filled by `increment` during a scan and consumed once by `finish`.
    """

    @abstractmethod
    def increment(self, extension: str, path: str, value: int) -> None:
        """Records one file's metric under its extension. Safe to call concurrently."""
        pass

    @abstractmethod
    def finish(self, sink: Optional[TextIO] = None, human_readable_base: Optional[int] = None) -> None:
        """
        Renders the report to `sink` and discards the accumulated state.
        Nothing is written when no extension was observed.
        """
        pass
