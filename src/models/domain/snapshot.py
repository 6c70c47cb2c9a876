"""Read-only projection of ApplicationState for rendering"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from models.enums import ErrorKind, IOOperation
from models.domain.application import ApplicationState


@dataclass(frozen=True)
class StateSnapshot:
    """
    Immutable copy of everything a presentation layer needs to render.

    Buffers are not exposed; entries[i] is the text of buffers[i].
    """
    file_path: str
    enabled: bool
    counter: int
    clock_text: str
    last_tick_time: Optional[datetime]
    entries: Tuple[str, ...]
    last_error: Optional[ErrorKind]
    last_error_operation: Optional[IOOperation]

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @classmethod
    def from_state(cls, state: ApplicationState) -> "StateSnapshot":
        return cls(
            file_path=str(state.file_path),
            enabled=state.enabled,
            counter=state.counter,
            clock_text=state.clock_text,
            last_tick_time=state.last_tick_time,
            entries=tuple(state.entries),
            last_error=state.last_error,
            last_error_operation=state.last_error_operation,
        )
