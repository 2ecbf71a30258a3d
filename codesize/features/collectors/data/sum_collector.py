from typing import Dict, Optional, TextIO

from codesize.features.reporting.service.reporter import Reporter
from .per_extension import PerExtensionCollector

class SumCollector(PerExtensionCollector[int]):
    """
    Running total of the metric per extension.
    """

    def __init__(self):
        super().__init__(int)

    def increment(self, extension: str, path: str, value: int) -> None:
        self._update(extension, lambda total: total + value)

    def totals(self) -> Dict[str, int]:
        """Snapshot of the current totals (does not consume the collector)."""
        with self._lock:
            return dict(self._data)

    def finish(self, sink: Optional[TextIO] = None, human_readable_base: Optional[int] = None) -> None:
        Reporter(sink).report_totals(self._take(), human_readable_base)
