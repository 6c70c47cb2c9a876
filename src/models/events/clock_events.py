"""Timer events"""

from dataclasses import dataclass
from datetime import datetime

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class TickEvent(Event):
    """Periodic clock tick carrying the wall-clock time it was produced at"""
    now: datetime

    def __init__(self, now: datetime, source: EventSource = EventSource.CLOCK):
        super().__init__(type=EventType.TICK, source=source)
        self.now = now
