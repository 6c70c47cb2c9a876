import asyncio

import pytest

from lifecycle.task_registry import TaskRegistry, TaskCategory, create_tracked_task


@pytest.mark.asyncio
async def test_tracks_completion_states():
    async def ok():
        return 42

    async def boom():
        raise RuntimeError("boom")

    async def forever():
        await asyncio.Event().wait()

    done = create_tracked_task(ok(), category=TaskCategory.IO, description="ok")
    failed = create_tracked_task(boom(), category=TaskCategory.IO, description="boom")
    running = create_tracked_task(forever(), category=TaskCategory.RUNTIME, description="forever")
    await asyncio.gather(done, failed, return_exceptions=True)
    await asyncio.sleep(0)

    registry = TaskRegistry.instance()
    by_name = {r.info.description: r for r in registry.list_all()}
    assert by_name["ok"].status == "completed"
    assert by_name["ok"].finished_return == 42
    assert by_name["boom"].status == "failed"
    assert isinstance(by_name["boom"].finished_with_error, RuntimeError)
    assert by_name["forever"].status == "running"
    assert registry.active()[0].task is running

    running.cancel()
    await asyncio.gather(running, return_exceptions=True)
    await asyncio.sleep(0)
    assert by_name["forever"].status == "cancelled"
    assert "cancelled=1" in registry.summary()


@pytest.mark.asyncio
async def test_finished_records_are_pruned():
    TaskRegistry._instance = TaskRegistry(history_limit=3)

    async def noop():
        return None

    for i in range(6):
        await create_tracked_task(noop(), category=TaskCategory.IO, description=f"save {i}")
    await asyncio.sleep(0)

    records = TaskRegistry.instance().list_all()
    assert [r.info.description for r in records] == ["save 3", "save 4", "save 5"]
    assert [r.info.id for r in records] == [4, 5, 6]


@pytest.mark.asyncio
async def test_tasks_for_shutdown_excludes_given_tasks():
    async def forever():
        await asyncio.Event().wait()

    a = create_tracked_task(forever(), category=TaskCategory.CLOCK, description="a")
    b = create_tracked_task(forever(), category=TaskCategory.API, description="b")

    assert TaskRegistry.instance().get_tasks_for_shutdown(exclude=[a]) == [b]

    for t in (a, b):
        t.cancel()
    await asyncio.gather(a, b, return_exceptions=True)
