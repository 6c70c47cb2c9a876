"""
Models package - Data models for the filter list editor
"""

from .enums import ErrorKind, IOOperation, Motion, CommandType, LogLevel, LogCategory
from .commands import Command, LoadCommand, SaveCommand

__all__ = [
    'ErrorKind',
    'IOOperation',
    'Motion',
    'CommandType',
    'LogLevel',
    'LogCategory',
    'Command',
    'LoadCommand',
    'SaveCommand',
]
