import asyncio
import gc
import threading
import pytest

from codesize.core.concurrency import drain_fail_fast, run_in_thread


async def fail_with(message):
    raise ValueError(message)


def test_every_failure_in_a_batch_is_retrieved():
    """
    When several tasks fail together, one error is re-raised and the others
    are still collected, so asyncio never reports an unretrieved exception.
    """
    unretrieved = []
    raised = []

    async def scenario():
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(lambda _loop, context: unretrieved.append(context))

        pending = {asyncio.ensure_future(fail_with("a")), asyncio.ensure_future(fail_with("b"))}
        # Let both tasks fail before draining
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        try:
            await drain_fail_fast(pending)
        except ValueError as e:
            raised.append(str(e))
        pending = None
        gc.collect()

    asyncio.run(scenario())

    assert raised in (["a"], ["b"])
    assert unretrieved == []


def test_drain_cancels_remaining_tasks_on_failure():
    cancelled = []

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    async def scenario():
        pending = {asyncio.ensure_future(slow()), asyncio.ensure_future(fail_with("boom"))}
        with pytest.raises(ValueError, match="boom"):
            await drain_fail_fast(pending)
        assert pending == set()

    asyncio.run(scenario())
    assert cancelled == [True]


def test_run_in_thread_waits_for_worker_when_cancelled():
    started = threading.Event()
    release = threading.Event()
    finished = []
    abandoned = []

    def blocking_call():
        started.set()
        release.wait(5)
        finished.append(True)
        return "handle"

    async def scenario():
        task = asyncio.ensure_future(run_in_thread(blocking_call, on_abandon=abandoned.append))
        await asyncio.to_thread(started.wait, 5)
        task.cancel()
        await asyncio.sleep(0.05)
        # Still waiting on the worker thread, not yet unwound
        assert not task.done()

        release.set()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert finished == [True]

    asyncio.run(scenario())
    assert abandoned == ["handle"]
