from datetime import datetime
from pathlib import Path

import pytest

import engine.reducer as reducer
from engine import dispatch, create_initial_state, UnhandledEventError
from models.commands import LoadCommand, SaveCommand
from models.domain import ReplaceAll, InsertText, Enter, Move
from models.enums import ErrorKind, IOOperation, Motion
from models.events import (
    EventType,
    ToggleEnabledEvent,
    IncrementEvent,
    DecrementEvent,
    AddEntryEvent,
    EditEntryEvent,
    RequestSaveEvent,
    TickEvent,
    LoadCompletedEvent,
    SaveCompletedEvent,
)


def run(state, *events):
    command = None
    for event in events:
        _, command = dispatch(state, event)
        assert len(state.entries) == len(state.buffers)
        assert state.entries == [b.text for b in state.buffers]
    return command


def tick(second, micro=0):
    return TickEvent(datetime(2024, 5, 1, 12, 0, second, micro))


# === Initial state ===

def test_initial_state_requests_load():
    state, command = create_initial_state(Path("list.txt"), counter_seed=7)
    assert command == LoadCommand(Path("list.txt"))
    assert state.counter == 7
    assert state.enabled is False
    assert state.entries == []
    assert state.buffers == []
    assert state.clock_text == ""
    assert state.last_error is None


# === Counter, flag and clock ===

def test_increment_and_decrement(state):
    run(state, IncrementEvent(), IncrementEvent(), DecrementEvent())
    assert state.counter == 1
    run(state, DecrementEvent(), DecrementEvent())
    assert state.counter == -1


def test_toggle_sets_flag(state):
    run(state, ToggleEnabledEvent(True))
    assert state.enabled is True
    run(state, ToggleEnabledEvent(False))
    assert state.enabled is False


def test_tick_updates_clock_text(state):
    command = run(state, tick(5, 250000))
    assert command is None
    assert state.clock_text == "12:00:05"
    assert state.last_tick_time == datetime(2024, 5, 1, 12, 0, 5)


def test_tick_uses_clock_format():
    state, _ = create_initial_state(Path("f.txt"), clock_format="%H:%M")
    run(state, tick(5))
    assert state.clock_text == "12:00"


def test_tick_counts_only_while_enabled(state):
    run(state, tick(1))
    assert state.counter == 0
    run(state, ToggleEnabledEvent(True), tick(2), tick(3))
    assert state.counter == 2


def test_same_second_ticks_count_once(state):
    run(state, ToggleEnabledEvent(True), tick(1, 100), tick(1, 900000))
    assert state.counter == 1


def test_increment_order_before_toggle_does_not_matter():
    a, _ = create_initial_state(Path("f.txt"))
    b, _ = create_initial_state(Path("f.txt"))
    run(a, IncrementEvent(), ToggleEnabledEvent(True), tick(1))
    run(b, ToggleEnabledEvent(True), IncrementEvent(), tick(1))
    assert a == b
    assert a.counter == 2


# === Loading ===

def test_load_populates_entries_and_buffers(state):
    run(state, LoadCompletedEvent(content="a\nb\nc"))
    assert state.entries == ["a", "b", "c"]
    assert [b.text for b in state.buffers] == ["a", "b", "c"]


def test_load_of_empty_file_gives_no_entries(state):
    run(state, LoadCompletedEvent(content=""))
    assert state.entries == []


def test_failed_load_records_error(state):
    run(state, LoadCompletedEvent(error=ErrorKind.NOT_FOUND))
    assert state.entries == []
    assert state.last_error is ErrorKind.NOT_FOUND
    assert state.last_error_operation is IOOperation.LOAD


def test_load_completed_needs_exactly_one_outcome():
    with pytest.raises(ValueError):
        LoadCompletedEvent()
    with pytest.raises(ValueError):
        LoadCompletedEvent(content="a", error=ErrorKind.OTHER)


# === Entries ===

def test_add_entry_appends_empty_entry(state):
    run(state, LoadCompletedEvent(content="a\nb\nc"), AddEntryEvent())
    assert state.entries == ["a", "b", "c", ""]
    assert state.buffers[3].text == ""


def test_edit_entry_updates_text(state):
    run(state, LoadCompletedEvent(content="a\nb\nc"), EditEntryEvent(1, ReplaceAll("bb")))
    assert state.entries == ["a", "bb", "c"]


def test_edit_entry_keeps_cursor_between_events(state):
    run(
        state,
        AddEntryEvent(),
        EditEntryEvent(0, InsertText("example.com")),
        EditEntryEvent(0, Move(Motion.HOME)),
        EditEntryEvent(0, InsertText("||")),
    )
    assert state.entries == ["||example.com"]


def test_edit_entry_out_of_range_raises(state):
    run(state, LoadCompletedEvent(content="a"))
    with pytest.raises(IndexError):
        dispatch(state, EditEntryEvent(1, InsertText("x")))
    with pytest.raises(IndexError):
        dispatch(state, EditEntryEvent(-1, InsertText("x")))
    assert state.entries == ["a"]


# === Saving ===

def test_request_save_emits_joined_entries(state):
    run(state, LoadCompletedEvent(content="a\nb\nc"))
    command = run(state, RequestSaveEvent())
    assert command == SaveCommand(Path("filters.txt"), "a\nb\nc")


def test_request_save_with_no_entries(state):
    assert run(state, RequestSaveEvent()) == SaveCommand(Path("filters.txt"), "")


def test_failed_save_records_error_and_keeps_entries(state):
    run(state, LoadCompletedEvent(content="a"), SaveCompletedEvent(ErrorKind.PERMISSION_DENIED))
    assert state.entries == ["a"]
    assert state.last_error is ErrorKind.PERMISSION_DENIED
    assert state.last_error_operation is IOOperation.SAVE


def test_successful_save_clears_save_error(state):
    run(state, SaveCompletedEvent(ErrorKind.OTHER), SaveCompletedEvent())
    assert state.last_error is None
    assert state.last_error_operation is None


def test_successful_save_keeps_load_error(state):
    run(state, LoadCompletedEvent(error=ErrorKind.NOT_FOUND), SaveCompletedEvent())
    assert state.last_error is ErrorKind.NOT_FOUND
    assert state.last_error_operation is IOOperation.LOAD


def test_successful_load_keeps_save_error(state):
    run(state, SaveCompletedEvent(ErrorKind.OTHER), LoadCompletedEvent(content="a"))
    assert state.last_error is ErrorKind.OTHER


def test_successful_save_splits_multiline_entries(state):
    run(
        state,
        LoadCompletedEvent(content="ab"),
        EditEntryEvent(0, Move(Motion.LEFT)),
        EditEntryEvent(0, Enter()),
    )
    assert state.entries == ["a\nb"]

    command = run(state, RequestSaveEvent())
    assert command.content == "a\nb"

    run(state, SaveCompletedEvent())
    assert state.entries == ["a", "b"]
    assert [b.text for b in state.buffers] == ["a", "b"]


def test_successful_save_keeps_buffers_when_nothing_to_split(state):
    run(state, LoadCompletedEvent(content="a\nb"))
    buffers = list(state.buffers)
    run(state, RequestSaveEvent(), SaveCompletedEvent())
    assert state.buffers == buffers


def test_successful_save_drops_lone_empty_entry(state):
    run(state, AddEntryEvent())
    command = run(state, RequestSaveEvent())
    assert command.content == ""

    run(state, SaveCompletedEvent())
    assert state.entries == []
    assert state.buffers == []


def test_split_on_save_shifts_later_indices(state):
    run(
        state,
        LoadCompletedEvent(content="ab\nX"),
        EditEntryEvent(0, Move(Motion.LEFT)),
        EditEntryEvent(0, Enter()),
        SaveCompletedEvent(),
    )
    assert state.entries == ["a", "b", "X"]

    run(state, EditEntryEvent(1, ReplaceAll("Y")))
    assert state.entries == ["a", "Y", "X"]


# === Dispatch table ===

def test_unregistered_event_type_raises(state, monkeypatch):
    monkeypatch.delitem(reducer._TRANSITIONS, EventType.INCREMENT)
    with pytest.raises(UnhandledEventError):
        dispatch(state, IncrementEvent())
