"""
Buffered source adapters.

These turn the byte streams Python code usually holds (buffered files,
sockets made into files, in-memory bytes, chunk iterators such as a
streamed HTTP response body) into a BufferedSource.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from limit_read._types import DEFAULT_BUFFER_SIZE, BufferedSource

logger = logging.getLogger(__name__)


class PeekableSource:
    """
    BufferedSource over an object with peek() and read().

    io.BufferedReader.peek() returns what is buffered and performs at most
    one raw read when the buffer is empty, which is exactly fill_buf(). A
    following read(n) with n no larger than the peeked length is served from
    the buffer without touching the raw stream.
    """

    def __init__(self, reader: Any) -> None:
        self._reader = reader

    @property
    def reader(self) -> Any:
        """The wrapped reader."""
        return self._reader

    def fill_buf(self) -> bytes:
        # peek(1) returns the whole buffer; gzip, bz2 and zip readers require n
        return self._reader.peek(1)

    def consume(self, amount: int) -> None:
        if amount:
            self._reader.read(amount)

    def close(self) -> None:
        self._reader.close()


class ChunkSource:
    """
    BufferedSource over an iterable of byte chunks.

    Each chunk is pulled only once everything before it has been consumed.
    Empty chunks are skipped; exhaustion of the iterable is end of source.

    Args:
        chunks: Iterable yielding bytes-like chunks
        close: Optional callback run by close(), e.g. a response's close()
    """

    def __init__(
        self,
        chunks: Iterable[bytes],
        close: Callable[[], None] | None = None,
    ) -> None:
        self._chunks: Iterator[bytes] | None = iter(chunks)
        self._buffer = bytearray()
        self._close = close

    def fill_buf(self) -> bytearray:
        # Consumed bytes are deleted from the front in place; the buffer
        # itself is returned, not a copy.
        while not self._buffer and self._chunks is not None:
            try:
                chunk = next(self._chunks)
            except StopIteration:
                self._chunks = None
                break
            self._buffer += chunk
        return self._buffer

    def consume(self, amount: int) -> None:
        if amount > len(self._buffer):
            raise ValueError(
                f"cannot consume {amount} bytes, only {len(self._buffer)} buffered"
            )
        del self._buffer[:amount]

    def close(self) -> None:
        self._chunks = None
        self._buffer.clear()
        if self._close is not None:
            self._close()


def as_buffered_source(
    obj: Any,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> BufferedSource:
    """
    Adapt obj to a BufferedSource.

    Accepted, in order of precedence:
    - anything already implementing fill_buf()/consume()
    - objects with peek() and read() (io.BufferedReader, io.BufferedRandom)
    - bytes, bytearray or memoryview
    - binary streams with readinto() (raw files, io.BytesIO), wrapped in an
      io.BufferedReader of buffer_size bytes
    - any other iterable of byte chunks

    Args:
        obj: The object to adapt
        buffer_size: Buffer size used when a raw stream has to be wrapped

    Returns:
        A BufferedSource reading from obj

    Raises:
        TypeError: If obj is a text stream, a str, or otherwise unsupported
    """
    if isinstance(obj, BufferedSource):
        return obj
    if isinstance(obj, io.TextIOBase | str):
        raise TypeError(
            "text input is not supported; pass a binary stream or bytes "
            "(for text files use the underlying .buffer)"
        )
    if hasattr(obj, "peek") and hasattr(obj, "read"):
        return PeekableSource(obj)
    if isinstance(obj, bytes | bytearray | memoryview):
        return ChunkSource([bytes(obj)])
    if hasattr(obj, "readinto"):
        logger.debug(
            "Wrapping %s in BufferedReader(buffer_size=%d)",
            type(obj).__name__,
            buffer_size,
        )
        return PeekableSource(io.BufferedReader(obj, buffer_size))
    if isinstance(obj, Iterable):
        return ChunkSource(obj)
    raise TypeError(f"cannot read from {type(obj).__name__}")
