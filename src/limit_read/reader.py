"""
LimitReader: bounded reads over a buffered byte source.

This is the public entry point of the library. A LimitReader owns one
buffered source and offers bounded delimiter reads, bounded line reads, and
iterators over records and lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from limit_read._guard import TextBuffer, append_to_text
from limit_read._iter import Lines, Split
from limit_read._scan import read_until
from limit_read._source import ChunkSource, as_buffered_source
from limit_read._types import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_MAX_LENGTH,
    LINE_TERMINATOR,
    BufferedSource,
    DelimiterLike,
    check_max_length,
    to_delimiter,
)

if TYPE_CHECKING:
    import httpx


class LimitReader:
    """
    Bounded reader over a buffered byte source.

    The reader takes exclusive ownership of its source. Reads block while
    the source blocks; there is no internal concurrency.

    Every operation takes a max_length bounding a single record, delimiter
    included. The bound is enforced when the delimiter is found: a record
    whose delimiter lies past max_length raises SizeExceededError without
    consuming that chunk. A source that never produces the delimiter is read
    to its end regardless of the bound.

    Usage:

        with LimitReader(sock.makefile("rb"), max_length=8192) as reader:
            for line in reader.lines():
                handle(line)

    Args:
        source: A BufferedSource, a buffered binary stream, a raw binary
            stream, bytes, or an iterable of byte chunks
        max_length: Default bound for operations called without one
        buffer_size: Buffer size used when a raw stream must be wrapped
    """

    def __init__(
        self,
        source: Any,
        *,
        max_length: int = DEFAULT_MAX_LENGTH,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        self._source = as_buffered_source(source, buffer_size)
        self._max_length = check_max_length(max_length)
        self._closed = False

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        *,
        max_length: int = DEFAULT_MAX_LENGTH,
        chunk_size: int | None = None,
    ) -> LimitReader:
        """
        Read the body of a streamed httpx response.

        The response should have been opened with stream=True (or
        client.stream()) so the body is not loaded up front. Closing the
        reader closes the response.

        Args:
            response: The httpx response
            max_length: Default bound for operations called without one
            chunk_size: Passed to response.iter_bytes()

        Returns:
            A LimitReader over the decoded response body
        """
        source = ChunkSource(response.iter_bytes(chunk_size), close=response.close)
        return cls(source, max_length=max_length)

    @property
    def source(self) -> BufferedSource:
        """The buffered source this reader owns."""
        return self._source

    @property
    def max_length(self) -> int:
        """Default bound used when an operation is called without one."""
        return self._max_length

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        """Raise if the reader has been closed."""
        if self._closed:
            raise ValueError("I/O operation on closed reader")

    def _resolve_max(self, max_length: int | None) -> int:
        if max_length is None:
            return self._max_length
        return check_max_length(max_length)

    def read_until(
        self,
        delimiter: DelimiterLike,
        buf: bytearray,
        max_length: int | None = None,
    ) -> int:
        """
        Append bytes to buf up to and including the next delimiter.

        Bytes already in buf are never changed. If the source fails midway,
        bytes appended so far stay in buf.

        Args:
            delimiter: Delimiter byte (int or length-1 bytes)
            buf: Output buffer
            max_length: Bound for this read (default: the reader's)

        Returns:
            Number of bytes read, 0 at end of source

        Raises:
            SizeExceededError: If the delimiter lies past max_length
            ValueError: If the reader is closed
        """
        self._ensure_open()
        return read_until(
            self._source, to_delimiter(delimiter), buf, self._resolve_max(max_length)
        )

    def read_line(self, buf: TextBuffer, max_length: int | None = None) -> int:
        """
        Append the next line, terminator included, to buf.

        buf only ever holds valid UTF-8. If the line is not valid UTF-8, buf
        is left as it was before the call.

        Args:
            buf: Output text buffer
            max_length: Bound for this read (default: the reader's)

        Returns:
            Number of bytes read, 0 at end of source

        Raises:
            SizeExceededError: If the line terminator lies past max_length
            InvalidDataError: If the line is not valid UTF-8
            ValueError: If the reader is closed
        """
        self._ensure_open()

        def scan(raw: bytearray, limit: int) -> int:
            return read_until(self._source, LINE_TERMINATOR, raw, limit)

        return append_to_text(buf, self._resolve_max(max_length), scan)

    def split(self, delimiter: DelimiterLike, max_length: int | None = None) -> Split:
        """
        Iterate over records separated by delimiter.

        Args:
            delimiter: Delimiter byte (int or length-1 bytes)
            max_length: Bound for each record (default: the reader's)

        Returns:
            An iterator of bytes records with the delimiter removed
        """
        self._ensure_open()
        return Split(self._source, delimiter, self._resolve_max(max_length))

    def lines(self, max_length: int | None = None) -> Lines:
        """
        Iterate over text lines.

        Args:
            max_length: Bound for each line, terminator included
                (default: the reader's)

        Returns:
            An iterator of str lines with LF or CRLF removed
        """
        self._ensure_open()
        return Lines(self._source, self._resolve_max(max_length))

    def close(self) -> None:
        """Close the underlying source, if it can be closed."""
        if not self._closed:
            self._closed = True
            close = getattr(self._source, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> LimitReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __iter__(self) -> Lines:
        return self.lines()
