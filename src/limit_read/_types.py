"""
Core types for the limit-read library.

This module defines the buffered source protocol and the constants shared
by the scanning, guard and iterator modules.
"""

from typing import Protocol, runtime_checkable

# Type alias for a delimiter argument: a byte value or a length-1 bytes object
DelimiterLike = int | bytes | bytearray


@runtime_checkable
class BufferedSource(Protocol):
    """
    A byte source with an explicit read cursor.

    fill_buf() returns the bytes currently buffered without consuming them,
    refilling from the underlying stream only when nothing is buffered. An
    empty result means the source is exhausted.

    consume(n) advances the cursor by n bytes, where n never exceeds the
    length of the last fill_buf() result.
    """

    def fill_buf(self) -> bytes | bytearray | memoryview: ...

    def consume(self, amount: int) -> None: ...


# Line terminator byte
LINE_TERMINATOR = 0x0A  # b"\n"

# Default cap on a single record when a reader is built without one
DEFAULT_MAX_LENGTH = 64 * 1024

# Chunk size used when wrapping raw binary streams
DEFAULT_BUFFER_SIZE = 8192


def to_delimiter(value: DelimiterLike) -> int:
    """
    Normalize a delimiter argument to its byte value.

    Args:
        value: An int in range(256) or a length-1 bytes/bytearray

    Returns:
        The delimiter as an int

    Raises:
        ValueError: If the value is not exactly one byte
        TypeError: If the value is neither an int nor bytes-like
    """
    if isinstance(value, bool):
        raise TypeError("delimiter must be an int or a single byte, not bool")
    if isinstance(value, int):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"delimiter must be in range(256), got {value}")
        return value
    if isinstance(value, bytes | bytearray):
        if len(value) != 1:
            raise ValueError(
                f"delimiter must be a single byte, got {len(value)} bytes"
            )
        return value[0]
    raise TypeError(
        f"delimiter must be an int or a single byte, not {type(value).__name__}"
    )


def check_max_length(value: int) -> int:
    """Validate a max length argument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"max_length must be an int, not {type(value).__name__}")
    if value < 0:
        raise ValueError(f"max_length must be non-negative, got {value}")
    return value
