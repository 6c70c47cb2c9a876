"""
Shutdown coordinator: critical task monitoring and handler ordering.
"""

import asyncio

import pytest

from engine import create_initial_state
from lifecycle.handlers import ClockShutdownHandler, RuntimeShutdownHandler, AllTasksCancellationHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import create_tracked_task, TaskCategory, TaskRegistry
from models.events import AddEntryEvent, RequestSaveEvent
from services import ApplicationRuntime, ClockSource, FileStore


class RecordingHandler:
    def __init__(self, name, priority, calls, fail=False):
        self.name = name
        self.shutdown_priority = priority
        self.calls = calls
        self.fail = fail

    async def shutdown(self):
        self.calls.append(self.name)
        if self.fail:
            raise RuntimeError(self.name)


async def forever():
    await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_wait_returns_on_request():
    coordinator = ShutdownCoordinator()
    task = create_tracked_task(forever(), category=TaskCategory.RUNTIME, description="loop")

    asyncio.get_running_loop().call_later(0.05, coordinator.request_shutdown, "test")
    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert coordinator.reason == "test"
    assert not task.done()
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)


@pytest.mark.asyncio
async def test_wait_returns_on_critical_task_failure():
    coordinator = ShutdownCoordinator()

    async def failing():
        await asyncio.sleep(0.05)
        raise RuntimeError("clock broke")

    create_tracked_task(failing(), category=TaskCategory.CLOCK, description="Clock ticks")
    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert coordinator.reason == "Task failure: Clock ticks"


@pytest.mark.asyncio
async def test_non_critical_failure_is_ignored():
    coordinator = ShutdownCoordinator()

    async def failing():
        raise RuntimeError("save task broke")

    create_tracked_task(failing(), category=TaskCategory.IO, description="Save")
    asyncio.get_running_loop().call_later(0.3, coordinator.request_shutdown, "test")
    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

    assert coordinator.reason == "test"


@pytest.mark.asyncio
async def test_handlers_run_by_priority_and_failures_do_not_stop_sequence():
    calls = []
    coordinator = ShutdownCoordinator()
    coordinator.register(RecordingHandler("low", 10, calls))
    coordinator.register(RecordingHandler("high", 90, calls, fail=True))
    coordinator.register(RecordingHandler("mid", 50, calls))

    await coordinator.shutdown_all()

    assert calls == ["high", "mid", "low"]


def test_register_rejects_incomplete_handler():
    with pytest.raises(ValueError):
        ShutdownCoordinator().register(object())


@pytest.mark.asyncio
async def test_runtime_and_clock_shutdown_flushes_pending_save(tmp_path):
    path = tmp_path / "filters.txt"
    state, _ = create_initial_state(path)
    runtime = ApplicationRuntime(state, FileStore())
    runtime_task = create_tracked_task(runtime.run(), category=TaskCategory.RUNTIME, description="loop")
    clock = ClockSource(runtime.submit_nowait, interval=0.01)
    clock_task = create_tracked_task(clock.run(), category=TaskCategory.CLOCK, description="clock")

    await runtime.submit_and_wait(AddEntryEvent())
    await runtime.submit(RequestSaveEvent())

    coordinator = ShutdownCoordinator()
    coordinator.register(ClockShutdownHandler(clock, clock_task))
    coordinator.register(RuntimeShutdownHandler(runtime, runtime_task))
    coordinator.register(AllTasksCancellationHandler())
    await coordinator.shutdown_all()

    assert path.read_text() == ""
    assert clock_task.done() and runtime_task.done()
    assert TaskRegistry.instance().active() == []
