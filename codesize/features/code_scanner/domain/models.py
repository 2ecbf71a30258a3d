from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional, Set

from codesize.core.common.enums import CollectorKind, MetricKind, WalkStrategy

@dataclass(frozen=True)
class ScanRequest:
    """
    Everything one run needs: what to scan, what to measure, how to aggregate.
    """
    root_path: Path
    metric: MetricKind = MetricKind.LINES
    collector: CollectorKind = CollectorKind.SUM
    largest: Optional[int] = None
    extensions: FrozenSet[str] = frozenset()
    human_readable: bool = False
    strategy: WalkStrategy = WalkStrategy.DESCRIPTOR
    use_git: bool = False
    concurrent: bool = False

    def __post_init__(self):
        object.__setattr__(self, "root_path", Path(self.root_path))
        object.__setattr__(self, "extensions", frozenset(self.extensions))
        if self.collector is CollectorKind.TOP_K and self.largest is None:
            raise ValueError("Top-k scans need the number of files to keep per extension.")
        if self.largest is not None and self.largest < 0:
            raise ValueError(f"Cannot keep a negative number of files ({self.largest}).")

    @property
    def human_readable_base(self) -> Optional[int]:
        return self.metric.human_readable_base if self.human_readable else None

    def accepts(self, extension: str) -> bool:
        return not self.extensions or extension in self.extensions

@dataclass
class ScanSummary:
    """
    Counters gathered while scanning, for logging.
    """
    files_visited: int = 0
    files_filtered: int = 0
    extensions: Set[str] = field(default_factory=set)
