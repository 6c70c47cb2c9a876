import asyncio
import os

import aiofiles
import pytest

from models.enums import ErrorKind
from services.file_store import FileStore, classify_error


@pytest.mark.asyncio
async def test_load_reads_whole_file(filter_file):
    result = await FileStore().load(filter_file)
    assert result.ok
    assert result.content == "a\nb\nc"


@pytest.mark.asyncio
async def test_load_keeps_line_endings_untouched(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"a\r\nb\n")
    result = await FileStore().load(path)
    assert result.content == "a\r\nb\n"


@pytest.mark.asyncio
async def test_load_missing_file(tmp_path):
    result = await FileStore().load(tmp_path / "missing.txt")
    assert not result.ok
    assert result.content is None
    assert result.error is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_load_directory_is_other_error(tmp_path):
    result = await FileStore().load(tmp_path)
    assert result.error in (ErrorKind.OTHER, ErrorKind.PERMISSION_DENIED)


@pytest.mark.asyncio
async def test_load_undecodable_file(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    result = await FileStore(encoding="utf-8").load(path)
    assert result.error is ErrorKind.OTHER


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
@pytest.mark.asyncio
async def test_load_unreadable_file(filter_file):
    filter_file.chmod(0o000)
    try:
        result = await FileStore().load(filter_file)
    finally:
        filter_file.chmod(0o644)
    assert result.error is ErrorKind.PERMISSION_DENIED


def deny_open(*args, **kwargs):
    raise PermissionError(13, "Permission denied")


@pytest.mark.asyncio
async def test_load_permission_denied(filter_file, monkeypatch):
    monkeypatch.setattr(aiofiles, "open", deny_open)
    result = await FileStore().load(filter_file)
    assert result.error is ErrorKind.PERMISSION_DENIED
    assert result.content is None


@pytest.mark.asyncio
async def test_save_permission_denied(filter_file, monkeypatch):
    monkeypatch.setattr(aiofiles, "open", deny_open)
    result = await FileStore().save(filter_file, "x")
    assert result.error is ErrorKind.PERMISSION_DENIED
    assert filter_file.read_text() == "a\nb\nc"
    assert not (filter_file.parent / ".filters.txt.tmp").exists()


@pytest.mark.asyncio
async def test_save_replaces_contents(filter_file):
    result = await FileStore().save(filter_file, "x\ny")
    assert result.ok
    assert filter_file.read_bytes() == b"x\ny"


@pytest.mark.asyncio
async def test_save_creates_file_and_leaves_no_temp(tmp_path):
    path = tmp_path / "new.txt"
    result = await FileStore().save(path, "")
    assert result.ok
    assert path.read_text() == ""
    assert [p.name for p in tmp_path.iterdir()] == ["new.txt"]


@pytest.mark.asyncio
async def test_save_into_missing_directory(tmp_path):
    result = await FileStore().save(tmp_path / "nope" / "filters.txt", "a")
    assert result.error is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_overlapping_saves_last_issued_wins(filter_file):
    store = FileStore()
    results = await asyncio.gather(*(store.save(filter_file, f"v{i}") for i in range(10)))
    assert all(r.ok for r in results)
    assert filter_file.read_text() == "v9"


@pytest.mark.parametrize("exc, kind", [
    (FileNotFoundError(), ErrorKind.NOT_FOUND),
    (PermissionError(), ErrorKind.PERMISSION_DENIED),
    (IsADirectoryError(), ErrorKind.OTHER),
    (OSError(28, "No space left on device"), ErrorKind.OTHER),
    (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), ErrorKind.OTHER),
])
def test_classify_error(exc, kind):
    assert classify_error(exc) is kind
