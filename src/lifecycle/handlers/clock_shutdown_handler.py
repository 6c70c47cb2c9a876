from __future__ import annotations
import asyncio
from typing import Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from services.clock_source import ClockSource
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ClockShutdownHandler(IShutdownHandler):
    """
    Stops tick generation and cancels the clock task.

    Priority: 80 (after the API, before the runtime)
    """

    def __init__(self, clock: ClockSource, task: Optional[asyncio.Task] = None):
        self.clock = clock
        self.task = task

    @property
    def shutdown_priority(self) -> int:
        return 80

    async def shutdown(self) -> None:
        log.info("Stopping clock...", ticks=self.clock.ticks_emitted)
        self.clock.stop()

        if self.task is not None and not self.task.done():
            self.task.cancel()
            await asyncio.gather(self.task, return_exceptions=True)
