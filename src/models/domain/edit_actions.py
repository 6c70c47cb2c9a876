"""Edit actions understood by EditableEntry"""

from dataclasses import dataclass
from typing import Union

from models.enums import Motion


@dataclass(frozen=True)
class InsertText:
    """Typed or pasted text; replaces the current selection"""
    text: str


@dataclass(frozen=True)
class Enter:
    """Insert a line break at the cursor"""


@dataclass(frozen=True)
class Backspace:
    """Delete the selection, or the character before the cursor"""


@dataclass(frozen=True)
class Delete:
    """Delete the selection, or the character after the cursor"""


@dataclass(frozen=True)
class Move:
    """Move the cursor, collapsing any selection"""
    motion: Motion


@dataclass(frozen=True)
class Select:
    """Move the cursor while extending the selection"""
    motion: Motion


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class Click:
    """Place the cursor at a character offset (clamped to the text)"""
    position: int


@dataclass(frozen=True)
class ReplaceAll:
    """Replace the whole text, cursor at the end"""
    text: str


EditAction = Union[InsertText, Enter, Backspace, Delete, Move, Select, SelectAll, Click, ReplaceAll]
