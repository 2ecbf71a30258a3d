import asyncio
import logging
from pathlib import Path
from typing import Coroutine, Optional, Set

from codesize.core.concurrency import drain_fail_fast
from codesize.core.config.settings import settings
from ..domain.interfaces import AsyncVisitor, IAsyncFileWalker
from ..domain.models import EntryKind, FileEntry
from .metadata_walker import list_directory

logger = logging.getLogger(__name__)

class _WalkContext:
    """
    Per-walk bookkeeping: the concurrency limit and every task still in flight.
    """

    def __init__(self, visit: AsyncVisitor, max_concurrency: int):
        self.visit = visit
        self.semaphore = asyncio.Semaphore(max_concurrency)
        self.pending: Set[asyncio.Task] = set()

    def spawn(self, work: Coroutine) -> None:
        self.pending.add(asyncio.ensure_future(work))


class AsyncFileWalker(IAsyncFileWalker):
    """
    Concurrent walker. Every subdirectory listing and every file visit is
    its own task; blocking filesystem calls run in worker threads.
    """

    def __init__(self, max_concurrency: Optional[int] = None):
        self.max_concurrency = max_concurrency or settings.MAX_CONCURRENCY

    async def walk(self, root: Path, visit: AsyncVisitor) -> None:
        ctx = _WalkContext(visit, self.max_concurrency)
        # Root errors surface here, before any task is spawned
        await self._scan_directory(Path(root), ctx)
        await drain_fail_fast(ctx.pending)

    async def _scan_directory(self, dir_path: Path, ctx: _WalkContext) -> None:
        async with ctx.semaphore:
            entries = await asyncio.to_thread(list_directory, dir_path)

        for entry in entries:
            if entry.kind is EntryKind.FILE:
                ctx.spawn(self._visit_file(FileEntry(path=entry.path, size=entry.size), ctx))
            elif entry.kind is EntryKind.DIRECTORY:
                ctx.spawn(self._scan_directory(entry.path, ctx))
            else:
                logger.debug(f"Skipping non-regular entry: {entry.path}")

    async def _visit_file(self, entry: FileEntry, ctx: _WalkContext) -> None:
        async with ctx.semaphore:
            await ctx.visit(entry)
