"""
File Store

Async read/replace of the filter list file. Failures are returned as
ErrorKind values instead of being raised, so the runtime can turn them
into LoadCompletedEvent / SaveCompletedEvent without special casing.
"""

import asyncio
import contextlib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from models.enums import ErrorKind
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.FILE)


@dataclass(frozen=True)
class LoadResult:
    content: Optional[str] = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SaveResult:
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def classify_error(exc: Exception) -> ErrorKind:
    """Map an I/O exception to its ErrorKind"""
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION_DENIED
    return ErrorKind.OTHER


class FileStore:
    """
    Reads and writes whole text files with aiofiles.

    Saves go to a sibling temporary file which then replaces the target, so
    readers never see a half-written list. Saves through one store are
    serialized: overlapping saves land in the order they were issued and the
    last one wins.

    Example:
        store = FileStore()
        result = await store.load(Path("filters.txt"))
        if result.ok:
            print(result.content)
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._save_lock = asyncio.Lock()

    async def load(self, path: Path) -> LoadResult:
        """
        Read the entire file as text.

        Args:
            path: File to read; it may not exist

        Returns:
            LoadResult with content, or with error on failure
        """
        try:
            async with aiofiles.open(path, "r", encoding=self.encoding, newline="") as f:
                content = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            kind = classify_error(e)
            log.warn("Failed to load filter list", path=str(path), error=kind.name, reason=str(e))
            return LoadResult(error=kind)

        log.info("Filter list loaded", path=str(path), chars=len(content))
        return LoadResult(content=content)

    async def save(self, path: Path, content: str) -> SaveResult:
        """
        Replace the file's contents with `content`.

        Args:
            path: Target file
            content: Full new contents

        Returns:
            SaveResult (error set on failure)
        """
        path = Path(path)
        tmp_path = path.with_name(f".{path.name}.tmp")

        async with self._save_lock:
            try:
                async with aiofiles.open(tmp_path, "w", encoding=self.encoding, newline="") as f:
                    await f.write(content)
                await aiofiles.os.replace(tmp_path, path)
            except (OSError, UnicodeEncodeError) as e:
                kind = classify_error(e)
                log.warn("Failed to save filter list", path=str(path), error=kind.name, reason=str(e))
                with contextlib.suppress(OSError):
                    await aiofiles.os.remove(tmp_path)
                return SaveResult(error=kind)

        log.info("Filter list saved", path=str(path), chars=len(content))
        return SaveResult()
