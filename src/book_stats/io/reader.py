# src/book_stats/io/reader.py
"""
Streaming reader for book files.

Each input file holds one top-level JSON array of record objects. Records
are decoded one at a time with ijson, so memory stays proportional to one
record rather than one file. Anything that breaks the array-of-objects shape
fails the whole file with a single FileParseError.

Public API:
    - iter_books(fh, source="<stream>") -> Iterator[Book]
    - parse_file(path, callback) -> int
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path
from typing import Any, BinaryIO

import ijson

from ..errors import FileParseError
from ..parsing.records import book_from_mapping
from ..types import Book

__all__ = ["iter_books", "parse_file"]

log = logging.getLogger(__name__)

_BOM = b"\xef\xbb\xbf"
_JSON_WS = b" \t\r\n"


def _buffered(fh: BinaryIO) -> io.BufferedReader:
    if isinstance(fh, io.BufferedReader):
        return fh
    return io.BufferedReader(fh)  # type: ignore[arg-type]


def _expect_array_start(fh: io.BufferedReader, source: str) -> None:
    """
    Skip a BOM and leading whitespace without consuming the first token,
    then require it to be '['. ijson alone would silently yield nothing for
    a top-level object.
    """
    if fh.peek(3)[:3] == _BOM:
        fh.read(3)
    while True:
        head = fh.peek(1)[:1]
        if not head:
            raise FileParseError(source, "empty file")
        if head in _JSON_WS:
            fh.read(1)
            continue
        if head != b"[":
            raise FileParseError(source, "top-level value is not a JSON array")
        return


def _coerce(obj: Mapping[str, Any], source: str, index: int) -> Book:
    """A record whose fields cannot be coerced counts as a book with no fields."""
    try:
        return book_from_mapping(obj)
    except Exception as e:
        log.warning("Ignoring fields of record %d in %s: %s", index, source, e)
        return Book()


def iter_books(fh: BinaryIO, source: str = "<stream>") -> Iterator[Book]:
    """
    Lazily yield books from a binary file handle.

    The generator is not restartable. It raises FileParseError as soon as the
    content stops being a well-formed array of objects (including trailing
    garbage after the array).
    """
    buf = _buffered(fh)
    _expect_array_start(buf, source)
    index = 0
    try:
        for obj in ijson.items(buf, "item"):
            if not isinstance(obj, Mapping):
                raise FileParseError(
                    source, f"element {index} is {type(obj).__name__}, not an object"
                )
            yield _coerce(obj, source, index)
            index += 1
    except (ijson.JSONError, UnicodeDecodeError, ValueError) as e:
        raise FileParseError(source, f"invalid JSON after {index} record(s): {e}") from e


def parse_file(path: Path, callback: Callable[[Book], None]) -> int:
    """
    Stream every book in ``path`` into ``callback`` as soon as it is decoded.

    Returns:
        Number of records handed to the callback.

    Raises:
        FileParseError: malformed content or unreadable file.
    """
    count = 0
    try:
        with open(path, "rb") as fh:
            for book in iter_books(fh, source=str(path)):
                callback(book)
                count += 1
    except OSError as e:
        raise FileParseError(path, str(e)) from e
    log.debug("Parsed %d record(s) from %s", count, path)
    return count
