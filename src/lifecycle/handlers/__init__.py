from .all_tasks_cancellation_handler import AllTasksCancellationHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .clock_shutdown_handler import ClockShutdownHandler
from .runtime_shutdown_handler import RuntimeShutdownHandler

__all__ = [
    "AllTasksCancellationHandler",
    "APIServerShutdownHandler",
    "ClockShutdownHandler",
    "RuntimeShutdownHandler",
]
