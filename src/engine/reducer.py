"""
Reducer - the state machine core

dispatch(state, event) is the only way ApplicationState changes:
- Runs to completion, never awaits and never touches the disk
- I/O is requested by returning a command; the hosting runtime executes it
  and feeds the outcome back as LoadCompletedEvent / SaveCompletedEvent
- Ticks carrying an already-seen second are ignored
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from models.commands import Command, LoadCommand, SaveCommand
from models.domain import ApplicationState, EditableEntry, DEFAULT_CLOCK_FORMAT
from models.enums import IOOperation
from models.events import (
    Event,
    EventType,
    ToggleEnabledEvent,
    TickEvent,
    LoadCompletedEvent,
    SaveCompletedEvent,
    EditEntryEvent,
)
from utils.lines import split_lines, join_lines, normalize_entries

# Handler signature: (state, event) -> optional command
Handler = Callable[[ApplicationState, Event], Optional[Command]]


class UnhandledEventError(Exception):
    """Raised when an event type has no registered transition"""


def create_initial_state(
    file_path: Path,
    counter_seed: int = 0,
    clock_format: str = DEFAULT_CLOCK_FORMAT,
) -> Tuple[ApplicationState, LoadCommand]:
    """
    Build the startup state paired with the initial load command.

    Args:
        file_path: Filter list file used for every load/save
        counter_seed: Initial counter value
        clock_format: strftime format for clock_text

    Returns:
        (state, LoadCommand for file_path)
    """
    path = Path(file_path)
    state = ApplicationState(file_path=path, clock_format=clock_format, counter=counter_seed)
    return state, LoadCommand(path)


# === Transitions ===

def _toggle_enabled(state: ApplicationState, event: ToggleEnabledEvent) -> None:
    state.enabled = event.enabled


def _tick(state: ApplicationState, event: TickEvent) -> None:
    now = event.now.replace(microsecond=0)
    if now == state.last_tick_time:
        return
    state.last_tick_time = now
    state.clock_text = now.strftime(state.clock_format)
    if state.enabled:
        state.counter += 1


def _increment(state: ApplicationState, event: Event) -> None:
    state.counter += 1


def _decrement(state: ApplicationState, event: Event) -> None:
    state.counter -= 1


def _load_completed(state: ApplicationState, event: LoadCompletedEvent) -> None:
    if not event.ok:
        state.record_error(IOOperation.LOAD, event.error)
        return
    for line in split_lines(event.content):
        state.entries.append(line)
        state.buffers.append(EditableEntry(line))
    state.clear_error(IOOperation.LOAD)


def _request_save(state: ApplicationState, event: Event) -> SaveCommand:
    return SaveCommand(state.file_path, join_lines(state.entries))


def _save_completed(state: ApplicationState, event: SaveCompletedEvent) -> None:
    if not event.ok:
        state.record_error(IOOperation.SAVE, event.error)
        return
    normalized = normalize_entries(state.entries)
    if normalized != state.entries:
        # Match what a reload of the saved file gives, and rebuild buffers to keep them in sync
        state.entries = normalized
        state.buffers = [EditableEntry(line) for line in normalized]
    state.clear_error(IOOperation.SAVE)


def _add_entry(state: ApplicationState, event: Event) -> None:
    state.entries.append("")
    state.buffers.append(EditableEntry())


def _edit_entry(state: ApplicationState, event: EditEntryEvent) -> None:
    if not 0 <= event.index < len(state.buffers):
        raise IndexError(
            f"Entry index {event.index} out of range (buffers: {len(state.buffers)})"
        )
    state.entries[event.index] = state.buffers[event.index].perform(event.action)


_TRANSITIONS: Dict[EventType, Handler] = {
    EventType.TOGGLE_ENABLED: _toggle_enabled,
    EventType.TICK: _tick,
    EventType.INCREMENT: _increment,
    EventType.DECREMENT: _decrement,
    EventType.LOAD_COMPLETED: _load_completed,
    EventType.REQUEST_SAVE: _request_save,
    EventType.SAVE_COMPLETED: _save_completed,
    EventType.ADD_ENTRY: _add_entry,
    EventType.EDIT_ENTRY: _edit_entry,
}


def dispatch(state: ApplicationState, event: Event) -> Tuple[ApplicationState, Optional[Command]]:
    """
    Apply one event to the state.

    Args:
        state: Current state (updated in place)
        event: Event to apply

    Returns:
        (state, command to execute or None)

    Raises:
        UnhandledEventError: If no transition is registered for event.type
        IndexError: EditEntryEvent with an index outside the current buffers
    """
    handler = _TRANSITIONS.get(event.type)
    if handler is None:
        raise UnhandledEventError(f"No transition for event type: {event.type}")
    command = handler(state, event)
    return state, command
