"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Ticks are frequent and carry no user data, so they stay out of the log.

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    if event.type is EventType.TICK:
        return event

    source_str = event.source.name if event.source else "-"
    data = event.to_data()
    if "content" in data and data["content"] is not None:
        # Whole file contents would flood the console
        data["content"] = f"<{len(data['content'])} chars>"

    log.debug(f"Event: {event.type.name} from {source_str} | {data}")
    return event
