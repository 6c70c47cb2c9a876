"""
Console logger

One line per message, key/value details drawn as a tree underneath:

    [14:23:45] FILE      ⚠ Failed to save filter list
               ├─ path: /srv/filters.txt
               └─ error: PERMISSION_DENIED

Modules grab a category-bound logger at import time:

    log = get_logger().for_category(LogCategory.FILE)
    log.info("Filter list loaded", chars=120)

configure_logger() changes the shared instance in place, so those bound
loggers pick up the configured level and colors.
"""

import sys
from datetime import datetime
from typing import Dict, List, Optional, TextIO

from models.enums import LogLevel, LogCategory


class Colors:
    """ANSI escape codes"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_BLUE = '\033[94m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_MAGENTA = '\033[95m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'


CATEGORY_COLORS: Dict[LogCategory, str] = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.STATE: Colors.BRIGHT_CYAN,
    LogCategory.EVENT: Colors.BRIGHT_MAGENTA,
    LogCategory.FILE: Colors.BRIGHT_GREEN,
    LogCategory.CLOCK: Colors.BRIGHT_YELLOW,
    LogCategory.API: Colors.BRIGHT_BLUE,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
    LogCategory.SHUTDOWN: Colors.MAGENTA,
    LogCategory.TASK: Colors.BLUE,
}

# (symbol, color) per level, listed from least to most severe
LEVEL_STYLES: Dict[LogLevel, tuple] = {
    LogLevel.DEBUG: ('·', Colors.DIM),
    LogLevel.INFO: ('✓', Colors.GREEN),
    LogLevel.WARN: ('⚠', Colors.YELLOW),
    LogLevel.ERROR: ('✗', Colors.RED),
}
_SEVERITY = {level: rank for rank, level in enumerate(LEVEL_STYLES)}

CATEGORY_WIDTH = 9
DETAIL_INDENT = " " * 11


class Logger:
    """Structured console logger shared by the whole application"""

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True,
                 stream: Optional[TextIO] = None):
        """
        Args:
            min_level: Messages below this level are dropped
            use_colors: Emit ANSI colors (turn off when output is not a terminal)
            stream: Output stream, sys.stdout at the time of writing when None
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.stream = stream

    def is_enabled_for(self, level: LogLevel) -> bool:
        return _SEVERITY[level] >= _SEVERITY[self.min_level]

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Colors.RESET}" if self.use_colors else text

    def format(self, category: LogCategory, message: str, level: LogLevel,
               details: Dict[str, object]) -> List[str]:
        """Render one message as output lines (without trailing newlines)"""
        symbol, color = LEVEL_STYLES[level]
        header = " ".join((
            datetime.now().strftime('[%H:%M:%S]'),
            self._paint(category.name.ljust(CATEGORY_WIDTH), CATEGORY_COLORS.get(category, Colors.WHITE)),
            self._paint(symbol, color),
            self._paint(message, color),
        ))

        lines = [header]
        last = len(details) - 1
        for i, (key, value) in enumerate(details.items()):
            branch = self._paint("└─" if i == last else "├─", Colors.DIM)
            lines.append(f"{DETAIL_INDENT}{branch} {key}: {value}")
        return lines

    def log(self, category: LogCategory, message: str, level: LogLevel = LogLevel.INFO, **details):
        """
        Write a message if its level passes the filter.

        Keyword arguments become the detail tree, in call order.
        """
        if not self.is_enabled_for(level):
            return
        stream = self.stream or sys.stdout
        stream.write("\n".join(self.format(category, message, level, details)) + "\n")
        stream.flush()

    def debug(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.DEBUG, **kw)
    def info(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.INFO, **kw)
    def warn(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.WARN, **kw)
    def error(self, category: LogCategory, message: str, **kw): self.log(category, message, LogLevel.ERROR, **kw)

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        return BoundLogger(self, category)


class BoundLogger:
    """Logger with a fixed category"""

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self.category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, **kw):
        self._base.log(self.category, message, level, **kw)

    def debug(self, message: str, **kw): self.log(message, LogLevel.DEBUG, **kw)
    def info(self, message: str, **kw): self.log(message, LogLevel.INFO, **kw)
    def warn(self, message: str, **kw): self.log(message, LogLevel.WARN, **kw)
    def error(self, message: str, **kw): self.log(message, LogLevel.ERROR, **kw)


_logger = Logger()


def get_logger() -> Logger:
    return _logger


def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True,
                     stream: Optional[TextIO] = None) -> Logger:
    """Reconfigure the shared logger in place and return it"""
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.stream = stream
    return _logger
