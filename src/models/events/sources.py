from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers"""
    PRESENTATION = auto()  # User interaction (API, UI)
    CLOCK = auto()         # ClockSource ticks
    FILE_STORE = auto()    # Results of load/save commands
    APPLICATION = auto()   # Generic application events
