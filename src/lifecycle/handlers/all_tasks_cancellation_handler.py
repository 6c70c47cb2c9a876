import asyncio
from typing import List, Optional

from utils.logger import get_logger, LogCategory
from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked task that is still running, except the task
    executing this handler and any explicitly excluded tasks.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        registry = TaskRegistry.instance()

        exclude = list(self.exclude_tasks)
        if current:
            exclude.append(current)

        tasks = registry.get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No leftover tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} leftover task{'s' if len(tasks) != 1 else ''}")
        for t in tasks:
            t.cancel(msg="shutdown")
            log.debug(f"Cancelled task: {t.get_name()}")

        await asyncio.gather(*tasks, return_exceptions=True)
        log.info("Leftover tasks cancelled", summary=registry.summary())
