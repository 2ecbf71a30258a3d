import threading
from typing import Callable, Dict, Generic, TypeVar

from codesize.core.errors import CollectorStateError
from ..domain.interfaces import ICollector

D = TypeVar("D")

class PerExtensionCollector(ICollector, Generic[D]):
    """
    Shared state for the collectors: one accumulator per extension, created
    lazily, guarded by a single lock, handed over exactly once.
    """

    def __init__(self, new_accumulator: Callable[[], D]):
        self._new_accumulator = new_accumulator
        self._data: Dict[str, D] = {}
        self._lock = threading.Lock()
        self._finished = False

    def _update(self, extension: str, apply: Callable[[D], D]) -> None:
        with self._lock:
            self._ensure_open()
            current = self._data.get(extension)
            if current is None:
                current = self._new_accumulator()
            self._data[extension] = apply(current)

    def _take(self) -> Dict[str, D]:
        with self._lock:
            self._ensure_open()
            self._finished = True
            data, self._data = self._data, {}
        return data

    def _ensure_open(self) -> None:
        if self._finished:
            raise CollectorStateError(f"{type(self).__name__} has already been finished")

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
