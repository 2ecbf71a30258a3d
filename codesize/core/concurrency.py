import asyncio
from typing import Any, Callable, Optional, Set

async def drain_fail_fast(pending: Set[asyncio.Task]) -> None:
    """
    Awaits every task in `pending`, including tasks added to the set while
    waiting. The first failure cancels whatever is still running and is
    re-raised once those tasks have unwound.
    """
    try:
        while pending:
            done, _ = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            pending.difference_update(done)
            first_error: Optional[BaseException] = None
            # Retrieve every failure in the batch, not just the one re-raised
            for task in done:
                if task.cancelled():
                    continue
                error = task.exception()
                if error is not None and first_error is None:
                    first_error = error
            if first_error is not None:
                raise first_error
    finally:
        await cancel_all(pending)

async def cancel_all(pending: Set[asyncio.Task]) -> None:
    if not pending:
        return
    for task in pending:
        task.cancel()
    # Wait for cancelled tasks to release their handles; their own
    # CancelledError/secondary errors are superseded by the first failure
    await asyncio.gather(*pending, return_exceptions=True)
    pending.clear()

async def run_in_thread(func: Callable[..., Any], *args: Any,
                        on_abandon: Optional[Callable[[Any], None]] = None) -> Any:
    """
    Runs `func(*args)` in a worker thread. A worker thread cannot be
    interrupted, so if the caller is cancelled this still waits for the
    call to return before re-raising; `on_abandon` receives its result.
    """
    work = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(work)
    except asyncio.CancelledError:
        await asyncio.wait({work})
        if not work.cancelled() and work.exception() is None and on_abandon is not None:
            on_abandon(work.result())
        raise
