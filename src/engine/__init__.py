"""State machine engine"""

from .reducer import dispatch, create_initial_state, UnhandledEventError

__all__ = ["dispatch", "create_initial_state", "UnhandledEventError"]
