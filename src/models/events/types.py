from enum import Enum, auto


class EventType(Enum):
    # User interaction
    TOGGLE_ENABLED = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    ADD_ENTRY = auto()
    EDIT_ENTRY = auto()
    REQUEST_SAVE = auto()

    # Timer
    TICK = auto()

    # Async I/O results
    LOAD_COMPLETED = auto()
    SAVE_COMPLETED = auto()
