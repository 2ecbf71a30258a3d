import asyncio
import logging
from pathlib import Path
from typing import Optional, Set, TextIO

from codesize.core.concurrency import drain_fail_fast
from codesize.core.config.settings import settings
from codesize.core.shared_types import extension_of
from codesize.features.collectors.domain.interfaces import ICollector
from codesize.features.collectors.service.api import build_collector
from codesize.features.metrics.data.async_metric_reader import AsyncMetricReader
from codesize.features.metrics.data.metric_reader import MetricReader
from codesize.features.tracked_source.data.git_index import GitIndexSource
from codesize.features.tracked_source.domain.interfaces import ITrackedFileSource
from codesize.features.tracked_source.domain.models import TrackedFile
from codesize.features.walker.data.async_walker import AsyncFileWalker
from codesize.features.walker.data.posix_ops import PosixOps
from codesize.features.walker.domain.models import FileEntry
from codesize.features.walker.service.api import build_walker

from ..domain.models import ScanRequest, ScanSummary

logger = logging.getLogger(__name__)

class CodeSizeScanner:
    """
    Drives one scan: file source -> extension filter -> metric -> collector.
    Fail-fast: the first error aborts the scan and no report is written.
    """

    def __init__(self,
                 tracked_source: Optional[ITrackedFileSource] = None,
                 ops: Optional[PosixOps] = None,
                 chunk_size: Optional[int] = None,
                 max_concurrency: Optional[int] = None):
        # In a full DI framework, these would be injected.
        self.tracked_source = tracked_source or GitIndexSource()
        self.ops = ops
        self.reader = MetricReader(chunk_size)
        self.async_reader = AsyncMetricReader(chunk_size)
        self.max_concurrency = max_concurrency or settings.MAX_CONCURRENCY

    def run(self, request: ScanRequest, sink: Optional[TextIO] = None) -> ScanSummary:
        """
        Scans, then renders the report to `sink`.
        The report is only written once the whole scan has succeeded.
        """
        collector = build_collector(request.collector, request.largest)
        if request.concurrent:
            summary = asyncio.run(self.scan_async(request, collector))
        else:
            summary = self.scan(request, collector)
        collector.finish(sink, request.human_readable_base)
        return summary

    def scan(self, request: ScanRequest, collector: ICollector) -> ScanSummary:
        summary = ScanSummary()
        logger.info(f"Starting {request.metric.value} scan of: {request.root_path}")

        if request.use_git:
            for tracked in self.tracked_source.list_files(request.root_path):
                if self._admit(request, tracked.relative_path, summary):
                    value = self.reader.read_metric(request.metric, self._tracked_entry(request.root_path, tracked))
                    self._record(collector, tracked.relative_path, value, summary)
        else:
            def visit(entry: FileEntry) -> None:
                if self._admit(request, entry.path, summary):
                    value = self.reader.read_metric(request.metric, entry)
                    self._record(collector, str(entry.path), value, summary)

            build_walker(request.strategy, self.ops).walk(request.root_path, visit)

        self._log_complete(summary)
        return summary

    async def scan_async(self, request: ScanRequest, collector: ICollector) -> ScanSummary:
        summary = ScanSummary()
        logger.info(f"Starting concurrent {request.metric.value} scan of: {request.root_path}")

        async def visit(entry: FileEntry, report_path: str) -> None:
            if self._admit(request, report_path, summary):
                value = await self.async_reader.read_metric(request.metric, entry)
                self._record(collector, report_path, value, summary)

        if request.use_git:
            tracked_files = await asyncio.to_thread(list, self.tracked_source.list_files(request.root_path))
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded_visit(tracked: TrackedFile) -> None:
                async with semaphore:
                    await visit(self._tracked_entry(request.root_path, tracked), tracked.relative_path)

            pending: Set[asyncio.Task] = {asyncio.ensure_future(bounded_visit(t)) for t in tracked_files}
            await drain_fail_fast(pending)
        else:
            walker = AsyncFileWalker(self.max_concurrency)
            await walker.walk(request.root_path, lambda entry: visit(entry, str(entry.path)))

        self._log_complete(summary)
        return summary

    def _admit(self, request: ScanRequest, path, summary: ScanSummary) -> bool:
        # Filter before reading so skipped files cost no I/O
        if request.accepts(extension_of(path)):
            return True
        summary.files_filtered += 1
        logger.debug(f"Filtered out by extension: {path}")
        return False

    def _record(self, collector: ICollector, path: str, value: int, summary: ScanSummary) -> None:
        extension = extension_of(path)
        collector.increment(extension, path, value)
        summary.files_visited += 1
        summary.extensions.add(extension)

    @staticmethod
    def _tracked_entry(root: Path, tracked: TrackedFile) -> FileEntry:
        return FileEntry(path=Path(root) / tracked.relative_path, size=tracked.size_hint)

    @staticmethod
    def _log_complete(summary: ScanSummary) -> None:
        logger.info(
            f"Scan complete. Visited {summary.files_visited} files "
            f"across {len(summary.extensions)} extensions ({summary.files_filtered} filtered)."
        )
