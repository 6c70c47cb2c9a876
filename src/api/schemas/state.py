"""
State schemas - Pydantic models for state snapshots and user events
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from models.domain import (
    StateSnapshot,
    EditAction, InsertText, Enter, Backspace, Delete,
    Move, Select, SelectAll, Click, ReplaceAll,
)
from models.enums import Motion


class StateResponse(BaseModel):
    """Everything needed to render the editor"""
    file_path: str
    enabled: bool
    counter: int
    clock_text: str
    last_tick_time: Optional[datetime] = None
    entries: List[str]
    entry_count: int
    last_error: Optional[str] = Field(
        None,
        description="NOT_FOUND, PERMISSION_DENIED or OTHER"
    )
    last_error_operation: Optional[str] = Field(
        None,
        description="LOAD or SAVE - which operation set last_error"
    )

    @classmethod
    def from_snapshot(cls, snapshot: StateSnapshot) -> "StateResponse":
        return cls(
            file_path=snapshot.file_path,
            enabled=snapshot.enabled,
            counter=snapshot.counter,
            clock_text=snapshot.clock_text,
            last_tick_time=snapshot.last_tick_time,
            entries=list(snapshot.entries),
            entry_count=snapshot.entry_count,
            last_error=snapshot.last_error.name if snapshot.last_error else None,
            last_error_operation=(
                snapshot.last_error_operation.name if snapshot.last_error_operation else None
            ),
        )


class SetEnabledRequest(BaseModel):
    """Request to switch the feature flag"""
    enabled: bool = Field(description="New value of the flag")


class CounterResponse(BaseModel):
    counter: int


class EntryListResponse(BaseModel):
    entries: List[str]
    count: int


class EntryResponse(BaseModel):
    index: int
    text: str


class SaveAcceptedResponse(BaseModel):
    """The save runs in the background; its outcome shows up in later snapshots"""
    status: Literal["accepted"] = "accepted"
    path: str
    entry_count: int


MotionName = Literal[
    "LEFT", "RIGHT", "WORD_LEFT", "WORD_RIGHT",
    "HOME", "END", "DOCUMENT_START", "DOCUMENT_END",
]

EditKind = Literal[
    "insert", "enter", "backspace", "delete",
    "move", "select", "select_all", "click", "replace",
]


class EditActionRequest(BaseModel):
    """
    One edit action on an entry buffer

    - insert / replace: `text` required
    - move / select: `motion` required (a Motion name)
    - click: `position` required
    """
    kind: EditKind
    text: Optional[str] = None
    motion: Optional[MotionName] = None
    position: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def validate_payload(self):
        if self.kind in ("insert", "replace") and self.text is None:
            raise ValueError(f"text is required for '{self.kind}'")
        if self.kind in ("move", "select") and self.motion is None:
            raise ValueError(f"motion is required for '{self.kind}'")
        if self.kind == "click" and self.position is None:
            raise ValueError("position is required for 'click'")
        return self

    def to_action(self) -> EditAction:
        if self.kind == "insert":
            return InsertText(self.text)
        if self.kind == "replace":
            return ReplaceAll(self.text)
        if self.kind == "enter":
            return Enter()
        if self.kind == "backspace":
            return Backspace()
        if self.kind == "delete":
            return Delete()
        if self.kind == "move":
            return Move(Motion[self.motion])
        if self.kind == "select":
            return Select(Motion[self.motion])
        if self.kind == "select_all":
            return SelectAll()
        return Click(self.position)
