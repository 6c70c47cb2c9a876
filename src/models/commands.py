"""Commands - side-effecting requests emitted by the reducer"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from models.enums import CommandType


@dataclass(frozen=True)
class LoadCommand:
    """Read the whole filter list file"""
    path: Path

    @property
    def type(self) -> CommandType:
        return CommandType.LOAD


@dataclass(frozen=True)
class SaveCommand:
    """Replace the filter list file with `content`"""
    path: Path
    content: str

    @property
    def type(self) -> CommandType:
        return CommandType.SAVE


Command = Union[LoadCommand, SaveCommand]
