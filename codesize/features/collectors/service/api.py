from typing import Optional

from codesize.core.common.enums import CollectorKind
from ..domain.interfaces import ICollector
from ..data.sum_collector import SumCollector
from ..data.top_k_collector import TopKCollector

def build_collector(kind: CollectorKind, capacity: Optional[int] = None) -> ICollector:
    if kind is CollectorKind.TOP_K:
        if capacity is None:
            raise ValueError("A top-k collector needs a capacity.")
        return TopKCollector(capacity)
    return SumCollector()
