import asyncio

import pytest

from src.app.services.interval_scheduler import IntervalScheduler


@pytest.mark.asyncio
async def test_run_once_runs_job():
    calls = []

    async def job():
        calls.append(1)

    scheduler = IntervalScheduler(job, interval_seconds=60)

    assert await scheduler.run_once() is True
    assert calls == [1]


@pytest.mark.asyncio
async def test_overlapping_run_is_skipped():
    release = asyncio.Event()
    started = asyncio.Event()
    calls = []

    async def slow_job():
        calls.append(1)
        started.set()
        await release.wait()

    scheduler = IntervalScheduler(slow_job, interval_seconds=60)

    first = asyncio.create_task(scheduler.run_once())
    await started.wait()

    assert await scheduler.run_once() is False

    release.set()
    assert await first is True
    assert calls == [1]


@pytest.mark.asyncio
async def test_loop_survives_failing_job():
    calls = []

    async def flaky_job():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first run fails")

    scheduler = IntervalScheduler(flaky_job, interval_seconds=0.01, run_on_start=True)
    scheduler.start()
    assert scheduler.is_running

    for _ in range(100):
        if len(calls) >= 2:
            break
        await asyncio.sleep(0.01)

    await scheduler.stop()
    assert len(calls) >= 2
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_start_is_idempotent_and_stop_cancels():
    async def job():
        pass

    scheduler = IntervalScheduler(job, interval_seconds=3600)
    scheduler.start()
    task = scheduler._task
    scheduler.start()
    assert scheduler._task is task

    await scheduler.stop()
    assert task.cancelled() or task.done()
    assert scheduler._task is None
