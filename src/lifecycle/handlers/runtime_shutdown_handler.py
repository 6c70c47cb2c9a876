from __future__ import annotations
import asyncio
from typing import Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from services.application_runtime import ApplicationRuntime
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class RuntimeShutdownHandler(IShutdownHandler):
    """
    Lets queued events and in-flight saves finish, then cancels the event
    loop task.

    The drain is bounded by `drain_timeout`; whatever is still pending after
    that is abandoned with the loop.

    Priority: 60
    """

    def __init__(self, runtime: ApplicationRuntime, task: Optional[asyncio.Task] = None,
                 drain_timeout: float = 3.0):
        self.runtime = runtime
        self.task = task
        self.drain_timeout = drain_timeout

    @property
    def shutdown_priority(self) -> int:
        return 60

    async def shutdown(self) -> None:
        if self.runtime.is_running:
            log.info("Draining event queue...", pending_commands=self.runtime.pending_commands)
            try:
                await asyncio.wait_for(self.runtime.wait_idle(), timeout=self.drain_timeout)
            except asyncio.TimeoutError:
                log.warn(f"Runtime not idle after {self.drain_timeout}s, cancelling anyway",
                         pending_commands=self.runtime.pending_commands)

        if self.task is not None and not self.task.done():
            self.task.cancel()
            await asyncio.gather(self.task, return_exceptions=True)

        snapshot = self.runtime.snapshot()
        log.info("Runtime stopped", counter=snapshot.counter, entries=snapshot.entry_count)
