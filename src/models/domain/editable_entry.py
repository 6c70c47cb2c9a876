"""Editable entry - one line of the filter list with cursor/selection state"""

from typing import Callable, Dict, Optional, Tuple

from models.enums import Motion
from models.domain.edit_actions import (
    EditAction,
    InsertText, Enter, Backspace, Delete,
    Move, Select, SelectAll, Click, ReplaceAll,
)


class EditableEntry:
    """
    Text buffer backing one filter list entry.

    Cursor and selection anchor are character offsets into `text`
    (0 <= offset <= len(text)). A selection exists when the anchor is set
    and differs from the cursor.

    Example:
        entry = EditableEntry("example.com")
        entry.perform(Move(Motion.HOME))
        entry.perform(InsertText("||"))   # -> "||example.com"
    """

    def __init__(self, text: str = ""):
        self._text = text
        self.cursor = len(text)
        self.anchor: Optional[int] = None

        self._handlers: Dict[type, Callable[[EditAction], None]] = {
            InsertText: lambda a: self._insert(a.text),
            Enter: lambda a: self._insert("\n"),
            Backspace: lambda a: self._backspace(),
            Delete: lambda a: self._delete(),
            Move: lambda a: self._move(a.motion, extend=False),
            Select: lambda a: self._move(a.motion, extend=True),
            SelectAll: lambda a: self._select_all(),
            Click: lambda a: self._click(a.position),
            ReplaceAll: lambda a: self._replace_all(a.text),
        }

    def __repr__(self) -> str:
        return f"EditableEntry(text={self._text!r}, cursor={self.cursor}, anchor={self.anchor})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Optional[Tuple[int, int]]:
        """Ordered (start, end) of the selection, or None"""
        if self.anchor is None or self.anchor == self.cursor:
            return None
        return (min(self.anchor, self.cursor), max(self.anchor, self.cursor))

    @property
    def selected_text(self) -> str:
        span = self.selection
        if span is None:
            return ""
        return self._text[span[0]:span[1]]

    def perform(self, action: EditAction) -> str:
        """
        Apply an edit action and return the resulting text.

        Raises:
            TypeError: If the action type is not supported
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unsupported edit action: {type(action).__name__}")
        handler(action)
        return self._text

    # === Editing ===

    def _delete_selection(self) -> bool:
        span = self.selection
        self.anchor = None
        if span is None:
            return False
        start, end = span
        self._text = self._text[:start] + self._text[end:]
        self.cursor = start
        return True

    def _insert(self, fragment: str) -> None:
        self._delete_selection()
        self._text = self._text[:self.cursor] + fragment + self._text[self.cursor:]
        self.cursor += len(fragment)

    def _backspace(self) -> None:
        if self._delete_selection() or self.cursor == 0:
            return
        self._text = self._text[:self.cursor - 1] + self._text[self.cursor:]
        self.cursor -= 1

    def _delete(self) -> None:
        if self._delete_selection() or self.cursor == len(self._text):
            return
        self._text = self._text[:self.cursor] + self._text[self.cursor + 1:]

    def _replace_all(self, text: str) -> None:
        self._text = text
        self.cursor = len(text)
        self.anchor = None

    # === Cursor / selection ===

    def _select_all(self) -> None:
        self.anchor = 0
        self.cursor = len(self._text)

    def _click(self, position: int) -> None:
        self.cursor = max(0, min(position, len(self._text)))
        self.anchor = None

    def _move(self, motion: Motion, extend: bool) -> None:
        span = self.selection
        if extend:
            if self.anchor is None:
                self.anchor = self.cursor
        else:
            self.anchor = None
            # Plain left/right on a selection collapses to its edge
            if span is not None and motion in (Motion.LEFT, Motion.RIGHT):
                self.cursor = span[0] if motion is Motion.LEFT else span[1]
                return
        self.cursor = self._target(motion)

    def _target(self, motion: Motion) -> int:
        text, pos = self._text, self.cursor
        if motion is Motion.LEFT:
            return max(0, pos - 1)
        if motion is Motion.RIGHT:
            return min(len(text), pos + 1)
        if motion is Motion.HOME:
            return text.rfind("\n", 0, pos) + 1
        if motion is Motion.END:
            end = text.find("\n", pos)
            return len(text) if end == -1 else end
        if motion is Motion.DOCUMENT_START:
            return 0
        if motion is Motion.DOCUMENT_END:
            return len(text)
        if motion is Motion.WORD_LEFT:
            while pos > 0 and not text[pos - 1].isalnum():
                pos -= 1
            while pos > 0 and text[pos - 1].isalnum():
                pos -= 1
            return pos
        if motion is Motion.WORD_RIGHT:
            while pos < len(text) and not text[pos].isalnum():
                pos += 1
            while pos < len(text) and text[pos].isalnum():
                pos += 1
            return pos
        raise ValueError(f"Unknown motion: {motion}")
