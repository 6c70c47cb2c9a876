import asyncio
from datetime import datetime

import pytest

from models.events import EventType
from services.clock_source import ClockSource


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ClockSource(lambda e: None, interval=0)


@pytest.mark.asyncio
async def test_emits_ticks_until_stopped():
    received = []
    now = datetime(2024, 5, 1, 12, 0, 0)

    def emit(event):
        received.append(event)
        if len(received) == 3:
            clock.stop()

    clock = ClockSource(emit, interval=0.01, now_fn=lambda: now)
    await asyncio.wait_for(clock.run(), timeout=1.0)

    assert clock.ticks_emitted == 3
    assert all(e.type is EventType.TICK and e.now == now for e in received)


@pytest.mark.asyncio
async def test_awaits_async_emitter():
    received = []

    async def emit(event):
        received.append(event)

    clock = ClockSource(emit, interval=0.01)
    task = asyncio.create_task(clock.run())
    await asyncio.sleep(0.05)
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)

    assert task.cancelled()
    assert len(received) >= 1
    assert clock.ticks_emitted == len(received)
