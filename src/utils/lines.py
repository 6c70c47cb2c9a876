"""
Line codec for the persisted filter list

The file format is plain text with entries separated by a single "\\n".
No header, no escaping and no trailing-newline normalization, so
join_lines(split_lines(text)) == text for any text.
"""

from typing import Iterable, List

LINE_BREAK = "\n"


def split_lines(text: str) -> List[str]:
    """
    Split file content into entries.

    An empty file has no entries. A trailing line break yields a trailing
    empty entry, which keeps the split/join round trip exact.
    """
    if text == "":
        return []
    return text.split(LINE_BREAK)


def join_lines(entries: Iterable[str]) -> str:
    """Join entries back into file content."""
    return LINE_BREAK.join(entries)


def normalize_entries(entries: Iterable[str]) -> List[str]:
    """
    Re-derive entries from their joined text, as a reload of the saved file
    would.

    Entries that picked up a line break while being edited are broken into
    separate entries. A list holding only one empty entry becomes empty.
    """
    return split_lines(join_lines(entries))
