"""Services layer"""

from .event_bus import EventBus
from .file_store import FileStore, LoadResult, SaveResult
from .clock_source import ClockSource
from .application_runtime import ApplicationRuntime
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "FileStore",
    "LoadResult",
    "SaveResult",
    "ClockSource",
    "ApplicationRuntime",
    "ServiceContainer",
]
