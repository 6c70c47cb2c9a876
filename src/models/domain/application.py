"""Application state domain model"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from models.enums import ErrorKind, IOOperation
from models.domain.editable_entry import EditableEntry

DEFAULT_CLOCK_FORMAT = "%H:%M:%S"


@dataclass
class ApplicationState:
    """
    The single mutable record behind the editor.

    Owned by ApplicationRuntime and changed only through engine.reducer.dispatch().

    Sync invariant: `entries` and `buffers` always have the same length, and
    entries[i] equals buffers[i].text once an event touching index i has been
    processed.

    Default values defined here are the single source of truth used
    throughout the system (reducer, config fallback, API snapshots).
    """

    # === Fixed at construction ===
    file_path: Path
    clock_format: str = DEFAULT_CLOCK_FORMAT

    # === Toggle / counter ===
    enabled: bool = False
    counter: int = 0

    # === Clock ===
    clock_text: str = ""
    last_tick_time: Optional[datetime] = None

    # === Filter list ===
    entries: List[str] = field(default_factory=list)
    buffers: List[EditableEntry] = field(default_factory=list)

    # === Last I/O failure ===
    last_error: Optional[ErrorKind] = None
    last_error_operation: Optional[IOOperation] = None

    def record_error(self, operation: IOOperation, kind: ErrorKind) -> None:
        self.last_error = kind
        self.last_error_operation = operation

    def clear_error(self, operation: IOOperation) -> None:
        """Clear last_error only if the same kind of operation set it"""
        if self.last_error_operation is operation:
            self.last_error = None
            self.last_error_operation = None
