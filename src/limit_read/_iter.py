"""
Record and line iterators.

Both iterators are one-shot: they consume their source and cannot be
restarted. An error is raised from __next__ exactly once, after which the
iterator is exhausted and only raises StopIteration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from limit_read._guard import TextBuffer, append_to_text
from limit_read._scan import read_until
from limit_read._types import (
    LINE_TERMINATOR,
    BufferedSource,
    DelimiterLike,
    check_max_length,
    to_delimiter,
)

logger = logging.getLogger(__name__)


class Split(Iterator[bytes]):
    """
    Iterator over delimiter-separated byte records.

    Each record has its trailing delimiter removed; the last record of a
    source that does not end with the delimiter is yielded as is.
    """

    def __init__(
        self,
        source: BufferedSource,
        delimiter: DelimiterLike,
        max_length: int,
    ) -> None:
        self._source = source
        self._delimiter = to_delimiter(delimiter)
        self._max_length = check_max_length(max_length)
        self._done = False

    @property
    def delimiter(self) -> int:
        return self._delimiter

    @property
    def max_length(self) -> int:
        return self._max_length

    def __iter__(self) -> Split:
        return self

    def __next__(self) -> bytes:
        if self._done:
            raise StopIteration

        buf = bytearray()
        try:
            count = read_until(self._source, self._delimiter, buf, self._max_length)
        except Exception:
            self._done = True
            raise

        if count == 0:
            logger.debug("Record source exhausted")
            self._done = True
            raise StopIteration

        if buf[-1] == self._delimiter:
            del buf[-1]
        return bytes(buf)


class Lines(Iterator[str]):
    """
    Iterator over UTF-8 lines.

    A trailing "\\n" is removed from each line, and then one "\\r" before it
    if present, so both LF and CRLF endings are handled.
    """

    def __init__(self, source: BufferedSource, max_length: int) -> None:
        self._source = source
        self._max_length = check_max_length(max_length)
        self._done = False

    @property
    def max_length(self) -> int:
        return self._max_length

    def __iter__(self) -> Lines:
        return self

    def _scan(self, raw: bytearray, max_length: int) -> int:
        return read_until(self._source, LINE_TERMINATOR, raw, max_length)

    def __next__(self) -> str:
        if self._done:
            raise StopIteration

        buf = TextBuffer()
        try:
            count = append_to_text(buf, self._max_length, self._scan)
        except Exception:
            self._done = True
            raise

        if count == 0:
            logger.debug("Line source exhausted")
            self._done = True
            raise StopIteration

        line = buf.getvalue()
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line
