"""Clock source - emits a TickEvent on a fixed cadence"""

import asyncio
import inspect
from datetime import datetime
from typing import Any, Callable

from models.events import TickEvent
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CLOCK)


class ClockSource:
    """
    Periodic tick producer.

    Emits TickEvent(now_fn()) immediately, then once per `interval` seconds,
    until stop() is called or the task is cancelled. `emit` may be a plain
    function (e.g. runtime.submit_nowait) or a coroutine function.

    Example:
        clock = ClockSource(runtime.submit_nowait, interval=1.0)
        create_tracked_task(clock.run(), category=TaskCategory.CLOCK,
                            description="Clock ticks")
    """

    def __init__(
        self,
        emit: Callable[[TickEvent], Any],
        interval: float = 1.0,
        now_fn: Callable[[], datetime] = datetime.now,
    ):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self._emit = emit
        self.interval = interval
        self._now_fn = now_fn
        self._stop_requested = False
        self.ticks_emitted = 0

    def stop(self) -> None:
        self._stop_requested = True

    async def run(self) -> None:
        self._stop_requested = False
        log.info("Clock started", interval=f"{self.interval}s")
        try:
            while not self._stop_requested:
                result = self._emit(TickEvent(self._now_fn()))
                if inspect.isawaitable(result):
                    await result
                self.ticks_emitted += 1
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            log.debug("Clock cancelled")
            raise
        log.info("Clock stopped", ticks=self.ticks_emitted)
