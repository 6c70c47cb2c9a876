"""API middleware and exception handlers"""

from .error_handler import (
    DomainError,
    EntryNotFoundError,
    RuntimeUnavailableError,
    register_exception_handlers,
)

__all__ = [
    "DomainError",
    "EntryNotFoundError",
    "RuntimeUnavailableError",
    "register_exception_handlers",
]
