"""
Event Bus - Notification of processed events

The runtime publishes every event after the reducer has applied it, so
subscribers always observe the post-event state. Subscribers never mutate
state themselves; they dispatch new events through the runtime instead.

Implements pub-sub pattern:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Wildcard subscribers: subscribe_all(handler)
- Middleware: add_middleware(middleware_fn)
"""

import inspect
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional
from collections import deque

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Pub-sub bus for processed events

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Middleware pipeline (logging, blocking)
    - Async/sync handler support (auto-detected)
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()

        # Only failed saves
        bus.subscribe(
            EventType.SAVE_COMPLETED,
            on_save_failed,
            filter_fn=lambda e: not e.ok
        )

        await bus.publish(SaveCompletedEvent(error=ErrorKind.OTHER))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._wildcard: List[EventHandler] = []
        self._middleware: List[Callable[[Event], Optional[Event]]] = []
        self._event_history: Deque[Event] = deque(maxlen=history_limit)

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call (can be async or sync)
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def subscribe_all(self, handler: Callable[[Event], None], priority: int = 0) -> None:
        """Subscribe to every event type (runs after type-specific handlers)"""
        self._wildcard.append(EventHandler(handler, priority, None))
        self._wildcard.sort(key=lambda h: h.priority, reverse=True)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """
        Remove a handler registered with subscribe()

        Returns:
            True if a registration was removed
        """
        handlers = self._handlers.get(event_type, [])
        remaining = [h for h in handlers if h.handler != handler]
        self._handlers[event_type] = remaining
        return len(remaining) != len(handlers)

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add middleware to event processing pipeline

        Middleware can:
        - Modify events (return modified event)
        - Block events (return None)
        - Log/validate events

        Middleware runs in registration order (FIFO).
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=middleware.__name__)

    async def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers

        Flow:
        1. Apply middleware (can modify or block event)
        2. Save to event history
        3. Execute type handlers by priority, then wildcard handlers
        4. Apply per-handler filters
        5. Catch and log handler exceptions
        """
        for middleware in self._middleware:
            try:
                processed_event = middleware(event)
            except Exception as e:
                # Event passes through unchanged
                log.error(
                    f"Event middleware failed: {getattr(middleware, '__name__', middleware)} "
                    f"for {event.type.name}",
                    exception=repr(e)
                )
                continue
            if processed_event is None:
                return
            event = processed_event

        self._event_history.append(event)

        handlers = self._handlers.get(event.type, []) + self._wildcard
        if not handlers:
            return

        for handler_entry in handlers:
            try:
                if handler_entry.filter_fn and not handler_entry.filter_fn(event):
                    continue

                if inspect.iscoroutinefunction(handler_entry.handler):
                    await handler_entry.handler(event)
                else:
                    handler_entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(handler_entry.handler, '__name__', handler_entry.handler)} "
                    f"for {event.type.name}",
                    exception=repr(e)
                )

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """
        Get recent events from history

        Returns:
            List of recent events (newest last)
        """
        return list(self._event_history)[-limit:]

    def clear_history(self) -> None:
        """Clear event history"""
        self._event_history.clear()
