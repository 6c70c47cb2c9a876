"""Results of asynchronous file commands"""

from dataclasses import dataclass
from typing import Optional

from models.enums import ErrorKind
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class LoadCompletedEvent(Event):
    """
    Outcome of a LoadCommand

    Exactly one of `content` / `error` is set.
    """
    content: Optional[str]
    error: Optional[ErrorKind]

    def __init__(self, content: Optional[str] = None, error: Optional[ErrorKind] = None):
        if (content is None) == (error is None):
            raise ValueError("LoadCompletedEvent needs exactly one of content or error")
        super().__init__(type=EventType.LOAD_COMPLETED, source=EventSource.FILE_STORE)
        self.content = content
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(init=False)
class SaveCompletedEvent(Event):
    """Outcome of a SaveCommand (error is None on success)"""
    error: Optional[ErrorKind]

    def __init__(self, error: Optional[ErrorKind] = None):
        super().__init__(type=EventType.SAVE_COMPLETED, source=EventSource.FILE_STORE)
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None
