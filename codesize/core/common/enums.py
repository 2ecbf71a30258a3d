# File: codesize/core/common/enums.py

from enum import Enum, unique

@unique
class MetricKind(str, Enum):
    FILES = "files"
    BYTES = "bytes"
    LINES = "lines"

    @property
    def human_readable_base(self) -> int:
        return 1024 if self is MetricKind.BYTES else 1000

@unique
class CollectorKind(str, Enum):
    SUM = "sum"
    TOP_K = "top_k"

@unique
class WalkStrategy(str, Enum):
    DESCRIPTOR = "descriptor"
    METADATA = "metadata"
