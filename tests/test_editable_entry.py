import pytest

from models.domain import (
    EditableEntry,
    InsertText, Enter, Backspace, Delete,
    Move, Select, SelectAll, Click, ReplaceAll,
)
from models.enums import Motion


def test_new_entry_puts_cursor_at_end():
    entry = EditableEntry("abc")
    assert entry.text == "abc"
    assert entry.cursor == 3
    assert entry.selection is None


def test_insert_at_cursor():
    entry = EditableEntry("example.com")
    entry.perform(Move(Motion.HOME))
    assert entry.perform(InsertText("||")) == "||example.com"
    assert entry.cursor == 2


def test_backspace_and_delete():
    entry = EditableEntry("abc")
    assert entry.perform(Backspace()) == "ab"
    entry.perform(Click(0))
    assert entry.perform(Delete()) == "b"


def test_backspace_at_start_and_delete_at_end_do_nothing():
    entry = EditableEntry("abc")
    assert entry.perform(Delete()) == "abc"
    entry.perform(Move(Motion.DOCUMENT_START))
    assert entry.perform(Backspace()) == "abc"
    assert entry.cursor == 0


def test_select_then_backspace_removes_selection():
    entry = EditableEntry("abc")
    entry.perform(Select(Motion.LEFT))
    entry.perform(Select(Motion.LEFT))
    assert entry.selection == (1, 3)
    assert entry.selected_text == "bc"
    assert entry.perform(Backspace()) == "a"
    assert entry.selection is None


def test_typing_replaces_selection():
    entry = EditableEntry("old")
    entry.perform(SelectAll())
    assert entry.perform(InsertText("new")) == "new"
    assert entry.cursor == 3


def test_plain_move_collapses_selection_to_edge():
    entry = EditableEntry("abc")
    entry.perform(SelectAll())
    entry.perform(Move(Motion.LEFT))
    assert entry.cursor == 0
    assert entry.selection is None

    entry.perform(SelectAll())
    entry.perform(Move(Motion.RIGHT))
    assert entry.cursor == 3


def test_click_clamps_to_text():
    entry = EditableEntry("abc")
    entry.perform(Click(99))
    assert entry.cursor == 3
    entry.perform(Click(1))
    assert entry.cursor == 1


def test_enter_inserts_line_break():
    entry = EditableEntry("ab")
    entry.perform(Click(1))
    assert entry.perform(Enter()) == "a\nb"
    assert entry.cursor == 2


def test_home_and_end_stay_within_line():
    entry = EditableEntry("ab\ncd")
    entry.perform(Move(Motion.HOME))
    assert entry.cursor == 3
    entry.perform(Click(1))
    entry.perform(Move(Motion.END))
    assert entry.cursor == 2


def test_word_motions():
    entry = EditableEntry("foo.bar")
    entry.perform(Move(Motion.WORD_LEFT))
    assert entry.cursor == 4
    entry.perform(Move(Motion.WORD_LEFT))
    assert entry.cursor == 0
    entry.perform(Move(Motion.WORD_RIGHT))
    assert entry.cursor == 3
    entry.perform(Move(Motion.WORD_RIGHT))
    assert entry.cursor == 7


def test_replace_all_resets_cursor():
    entry = EditableEntry("abc")
    entry.perform(Click(0))
    assert entry.perform(ReplaceAll("bb")) == "bb"
    assert entry.cursor == 2


def test_unsupported_action_raises():
    with pytest.raises(TypeError):
        EditableEntry("abc").perform(object())
