import heapq
from typing import Dict, List, Optional, TextIO, Tuple

from codesize.features.reporting.service.reporter import Reporter
from .per_extension import PerExtensionCollector

SizedPath = Tuple[int, str]

class TopKCollector(PerExtensionCollector[List[SizedPath]]):
    """
    Keeps the `capacity` largest files per extension in a bounded min-heap.

    The heap is keyed on (size, path), so when sizes tie the smallest path is
    evicted first and the retained set does not depend on visit order.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"Capacity cannot be negative (got {capacity}).")
        super().__init__(list)
        self.capacity = capacity

    def increment(self, extension: str, path: str, value: int) -> None:
        self._update(extension, lambda heap: self._push_bounded(heap, (value, path)))

    def _push_bounded(self, heap: List[SizedPath], item: SizedPath) -> List[SizedPath]:
        if len(heap) < self.capacity:
            heapq.heappush(heap, item)
        elif heap and item > heap[0]:
            heapq.heapreplace(heap, item)
        return heap

    def retained(self) -> Dict[str, List[SizedPath]]:
        """Snapshot of the retained entries, largest first."""
        with self._lock:
            return {ext: sorted(heap, key=lambda item: (-item[0], item[1])) for ext, heap in self._data.items()}

    def finish(self, sink: Optional[TextIO] = None, human_readable_base: Optional[int] = None) -> None:
        Reporter(sink).report_largest(self._take(), human_readable_base)
