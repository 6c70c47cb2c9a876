"""
Application runtime - hosts the state machine

Owns the ApplicationState and funnels every event (presentation, clock,
file I/O results) through one asyncio.Queue, so the reducer never sees two
events at once. Commands returned by the reducer run as tracked tasks and
their outcome re-enters the queue as a new event.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Set, Tuple

from engine.reducer import dispatch
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.commands import Command, LoadCommand, SaveCommand
from models.domain import ApplicationState, StateSnapshot
from models.events import Event, EventType, LoadCompletedEvent, SaveCompletedEvent
from services.event_bus import EventBus
from services.file_store import FileStore
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STATE)

QueueItem = Tuple[Event, Optional[asyncio.Future]]


class ApplicationRuntime:
    """
    Single owner of ApplicationState.

    Responsibilities:
    - Serialize events: one dispatch() at a time, in arrival order
    - Execute LoadCommand / SaveCommand through the FileStore
    - Publish each processed event on the EventBus (post-state)
    - Hand out read-only snapshots for rendering

    Example:
        state, load = create_initial_state(Path("filters.txt"), counter_seed=0)
        runtime = ApplicationRuntime(state, FileStore(), EventBus())
        runtime.execute(load)
        create_tracked_task(runtime.run(), category=TaskCategory.RUNTIME,
                            description="Event loop")
        snapshot = await runtime.submit_and_wait(IncrementEvent())
    """

    def __init__(self, state: ApplicationState, file_store: FileStore, event_bus: Optional[EventBus] = None):
        self._state = state
        self._file_store = file_store
        self._event_bus = event_bus
        self._queue: "asyncio.Queue[QueueItem]" = asyncio.Queue()
        self._command_tasks: Set[asyncio.Task] = set()
        self._tick_pending = False
        self._running = False

    # === Read side ===

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def event_bus(self) -> Optional[EventBus]:
        return self._event_bus

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_commands(self) -> int:
        return sum(1 for t in self._command_tasks if not t.done())

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot.from_state(self._state)

    # === Event intake ===

    async def submit(self, event: Event) -> None:
        """Queue an event for processing"""
        if event.type is EventType.TICK:
            self._tick_pending = True
        await self._queue.put((event, None))

    def submit_nowait(self, event: Event) -> bool:
        """
        Queue an event without waiting.

        A tick is dropped while an earlier tick is still queued; its effect
        depends only on wall time, so the queued one covers it.

        Returns:
            False if the event was coalesced away
        """
        if event.type is EventType.TICK:
            if self._tick_pending:
                return False
            self._tick_pending = True
        self._queue.put_nowait((event, None))
        return True

    async def submit_and_wait(self, event: Event) -> StateSnapshot:
        """
        Queue an event and wait until it has been processed.

        Returns:
            Snapshot taken right after this event was applied

        Raises:
            Whatever dispatch() raised for this event (e.g. IndexError)
        """
        waiter = asyncio.get_running_loop().create_future()
        await self._queue.put((event, waiter))
        return await waiter

    # === Processing loop ===

    async def run(self) -> None:
        """Consume events until cancelled"""
        self._running = True
        log.info("Event loop started", file=str(self._state.file_path))
        try:
            while True:
                event, waiter = await self._queue.get()
                try:
                    await self._process(event, waiter)
                finally:
                    self._queue.task_done()
        finally:
            self._running = False
            log.info("Event loop stopped")

    async def _process(self, event: Event, waiter: Optional[asyncio.Future]) -> None:
        if event.type is EventType.TICK:
            self._tick_pending = False

        try:
            _, command = dispatch(self._state, event)
        except Exception as e:
            if waiter is not None and not waiter.done():
                waiter.set_exception(e)
            else:
                log.error(f"Event {event.type.name} rejected", error=repr(e))
            return

        if command is not None:
            self.execute(command)

        if waiter is not None and not waiter.done():
            waiter.set_result(self.snapshot())

        if self._event_bus is not None:
            try:
                await self._event_bus.publish(event)
            except Exception as e:
                log.error(f"Publishing {event.type.name} failed", error=repr(e))

    # === Commands ===

    def execute(self, command: Command) -> asyncio.Task:
        """
        Run a command in the background; its result is queued as an event.

        Used by the loop for reducer-emitted commands and at startup for
        the initial load.
        """
        log.debug(f"Executing {command.type.name} command", path=str(command.path))
        task = create_tracked_task(
            self._run_command(command),
            category=TaskCategory.IO,
            description=f"{command.type.name.title()} {command.path.name}",
        )
        self._command_tasks.add(task)
        task.add_done_callback(self._command_tasks.discard)
        return task

    async def _run_command(self, command: Command) -> None:
        if isinstance(command, LoadCommand):
            result = await self._file_store.load(command.path)
            if result.ok:
                event = LoadCompletedEvent(content=result.content)
            else:
                event = LoadCompletedEvent(error=result.error)
        elif isinstance(command, SaveCommand):
            result = await self._file_store.save(command.path, command.content)
            event = SaveCompletedEvent(error=result.error)
        else:
            raise TypeError(f"Unknown command: {command!r}")
        await self.submit(event)

    async def wait_idle(self) -> None:
        """
        Wait until the queue is drained and no command is in flight.

        Requires run() to be active.
        """
        while True:
            await self._queue.join()
            in_flight = [t for t in self._command_tasks if not t.done()]
            if not in_flight:
                if self._queue.empty():
                    return
                continue
            await asyncio.gather(*in_flight, return_exceptions=True)
