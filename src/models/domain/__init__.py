"""Domain models - State objects and editable buffers"""

from models.domain.application import ApplicationState, DEFAULT_CLOCK_FORMAT
from models.domain.snapshot import StateSnapshot
from models.domain.editable_entry import EditableEntry
from models.domain.edit_actions import (
    EditAction,
    InsertText,
    Enter,
    Backspace,
    Delete,
    Move,
    Select,
    SelectAll,
    Click,
    ReplaceAll,
)

__all__ = [
    "ApplicationState",
    "DEFAULT_CLOCK_FORMAT",
    "StateSnapshot",
    "EditableEntry",
    "EditAction",
    "InsertText",
    "Enter",
    "Backspace",
    "Delete",
    "Move",
    "Select",
    "SelectAll",
    "Click",
    "ReplaceAll",
]
