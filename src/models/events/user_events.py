"""User interaction events (dispatched by the presentation layer)"""

from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource
from models.domain.edit_actions import EditAction


@dataclass(init=False)
class ToggleEnabledEvent(Event):
    """Feature flag switched to a new value"""
    enabled: bool

    def __init__(self, enabled: bool, source: EventSource = EventSource.PRESENTATION):
        super().__init__(type=EventType.TOGGLE_ENABLED, source=source)
        self.enabled = enabled


@dataclass(init=False)
class IncrementEvent(Event):
    def __init__(self, source: EventSource = EventSource.PRESENTATION):
        super().__init__(type=EventType.INCREMENT, source=source)


@dataclass(init=False)
class DecrementEvent(Event):
    def __init__(self, source: EventSource = EventSource.PRESENTATION):
        super().__init__(type=EventType.DECREMENT, source=source)


@dataclass(init=False)
class AddEntryEvent(Event):
    """Append an empty entry to the list"""

    def __init__(self, source: EventSource = EventSource.PRESENTATION):
        super().__init__(type=EventType.ADD_ENTRY, source=source)


@dataclass(init=False)
class EditEntryEvent(Event):
    """Edit action applied to one entry buffer"""
    index: int
    action: EditAction

    def __init__(self, index: int, action: EditAction, source: EventSource = EventSource.PRESENTATION):
        """
        Args:
            index: Entry index, must come from the live buffer count
            action: Edit action to apply (see models.domain.edit_actions)
        """
        super().__init__(type=EventType.EDIT_ENTRY, source=source)
        self.index = index
        self.action = action


@dataclass(init=False)
class RequestSaveEvent(Event):
    """Persist the current entries to disk"""

    def __init__(self, source: EventSource = EventSource.PRESENTATION):
        super().__init__(type=EventType.REQUEST_SAVE, source=source)
