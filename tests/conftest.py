import asyncio
from pathlib import Path

import pytest
import pytest_asyncio

from engine import create_initial_state
from lifecycle.task_registry import TaskRegistry
from services import ApplicationRuntime, EventBus, FileStore


@pytest.fixture(autouse=True)
def reset_task_registry():
    TaskRegistry.reset()
    yield
    TaskRegistry.reset()


@pytest.fixture
def state():
    state, _ = create_initial_state(Path("filters.txt"))
    return state


@pytest.fixture
def filter_file(tmp_path):
    path = tmp_path / "filters.txt"
    path.write_text("a\nb\nc", encoding="utf-8")
    return path


@pytest_asyncio.fixture
async def runtime(filter_file):
    """
    Runtime over `filter_file` with its event loop running and the initial
    load already applied.
    """
    state, load = create_initial_state(filter_file)
    runtime = ApplicationRuntime(state, FileStore(), EventBus())
    task = asyncio.create_task(runtime.run())
    runtime.execute(load)
    await runtime.wait_idle()

    yield runtime

    task.cancel()
    await asyncio.gather(task, return_exceptions=True)
