"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, watches the critical tasks (event loop, clock, API
server) and runs the registered shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Set

from lifecycle.task_registry import TaskRegistry, TaskCategory
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

CRITICAL_CATEGORIES: Set[TaskCategory] = {
    TaskCategory.API,
    TaskCategory.RUNTIME,
    TaskCategory.CLOCK,
}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.register(RuntimeShutdownHandler(runtime, runtime_task))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self.reason: Optional[str] = None

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers that trigger shutdown"""
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason
            log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_event.is_set()

    def _critical_failure(self) -> Optional[str]:
        """Description of the first critical task that failed or exited, if any"""
        for record in TaskRegistry.instance().list_all():
            if record.info.category not in CRITICAL_CATEGORIES or not record.task.done():
                continue
            if record.cancelled:
                continue
            if record.finished_with_error is not None:
                log.error(f"Critical task failed: {record.info.description}",
                          task_category=record.info.category.name,
                          error=repr(record.finished_with_error))
                return f"Task failure: {record.info.description}"
            # Critical tasks run forever; a clean return is unexpected too
            log.warn(f"Critical task exited: {record.info.description}")
            return f"Task exited: {record.info.description}"
        return None

    async def wait_for_shutdown(self) -> None:
        """
        Wait for a shutdown request or a critical task ending.

        Returns when:
        - a signal arrives or request_shutdown() is called, OR
        - any task in a critical category fails or stops
        """
        while not self._shutdown_event.is_set():
            failure = self._critical_failure()
            if failure is not None:
                self.request_shutdown(failure)
                return

            critical = [
                r.task for r in TaskRegistry.instance().active()
                if r.info.category in CRITICAL_CATEGORIES
            ]
            waiter = asyncio.ensure_future(self._shutdown_event.wait())
            try:
                if critical:
                    await asyncio.wait([waiter, *critical], return_when=asyncio.FIRST_COMPLETED)
                else:
                    await asyncio.wait([waiter], timeout=0.2)
            finally:
                if not waiter.done():
                    waiter.cancel()

    async def shutdown_all(self) -> None:
        """
        Run all handlers in descending priority order.

        Each handler gets `timeout_per_handler`; the whole sequence stops
        starting new handlers once `total_timeout` is exceeded. A failing
        handler is logged and the sequence continues.
        """
        log.info("Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"{handler_name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                log.error(f"Error shutting down {handler_name}", error=repr(e))

        log.info("Shutdown sequence complete", tasks=TaskRegistry.instance().summary())
