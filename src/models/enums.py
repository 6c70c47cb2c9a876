"""
Enums for the filter list editor state machine
"""

from enum import Enum, auto


class ErrorKind(Enum):
    """
    Coarse classification of a file I/O failure

    Surfaced identically for load and save.
    """
    NOT_FOUND = auto()          # File (or its directory) does not exist
    PERMISSION_DENIED = auto()  # Read/write not permitted
    OTHER = auto()              # Anything else (disk full, bad encoding, ...)


class IOOperation(Enum):
    """Which file operation produced a result"""
    LOAD = auto()
    SAVE = auto()


class Motion(Enum):
    """Cursor motions understood by an editable entry"""
    LEFT = auto()
    RIGHT = auto()
    WORD_LEFT = auto()
    WORD_RIGHT = auto()
    HOME = auto()            # Start of the current line
    END = auto()             # End of the current line
    DOCUMENT_START = auto()
    DOCUMENT_END = auto()


class CommandType(Enum):
    """Side-effecting requests emitted by the reducer"""
    LOAD = auto()
    SAVE = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    STATE = auto()       # Reducer / state changes
    EVENT = auto()       # Event bus events and handling
    FILE = auto()        # Filter list load/save
    CLOCK = auto()       # Tick generation

    API = auto()

    SYSTEM = auto()      # Startup, shutdown, errors
    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
