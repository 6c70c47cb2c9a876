"""
Event system for the filter list editor

Every state change goes through one of these events. User interaction,
the clock and file I/O results all share the same event channel.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

# User interaction events
from models.events.user_events import (
    ToggleEnabledEvent,
    IncrementEvent,
    DecrementEvent,
    AddEntryEvent,
    EditEntryEvent,
    RequestSaveEvent,
)

# Timer events
from models.events.clock_events import TickEvent

# I/O result events
from models.events.io_events import LoadCompletedEvent, SaveCompletedEvent

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",

    # User interaction
    "ToggleEnabledEvent",
    "IncrementEvent",
    "DecrementEvent",
    "AddEntryEvent",
    "EditEntryEvent",
    "RequestSaveEvent",

    # Timer
    "TickEvent",

    # I/O results
    "LoadCompletedEvent",
    "SaveCompletedEvent",
]
