"""
Bounded delimiter scanning.

read_until() pulls chunks from a buffered source and copies bytes into the
caller's buffer until it finds the delimiter. The length bound is checked
only when the delimiter is found: the cumulative count, delimiter included,
must not exceed max_length. A source that never produces the delimiter is
read to its end without any bound.
"""

from __future__ import annotations

import logging

from limit_read._errors import SizeExceededError
from limit_read._types import BufferedSource

logger = logging.getLogger(__name__)


def read_until(
    source: BufferedSource,
    delimiter: int,
    buf: bytearray,
    max_length: int,
) -> int:
    """
    Append bytes from source to buf up to and including delimiter.

    Args:
        source: The buffered source to read from
        delimiter: The delimiter byte value
        buf: Output buffer; bytes already in it are never modified
        max_length: Bound on the cumulative count at the delimiter

    Returns:
        Number of bytes appended and consumed. This is 0 only if the source
        was already exhausted.

    Raises:
        SizeExceededError: If the delimiter is found past max_length. Nothing
            from the chunk holding it is appended or consumed.
        Exception: Any source failure other than InterruptedError, unchanged.
            Bytes appended before the failure stay in buf.
    """
    read = 0
    while True:
        try:
            available = source.fill_buf()
        except InterruptedError:
            logger.debug("Interrupted while filling buffer, retrying")
            continue

        if isinstance(available, memoryview):
            index = bytes(available).find(delimiter)
        else:
            index = available.find(delimiter)
        if index >= 0:
            total = read + index + 1
            if total > max_length:
                logger.debug(
                    "Delimiter %#04x at byte %d exceeds max_length=%d",
                    delimiter,
                    total,
                    max_length,
                )
                raise SizeExceededError(max_length, total)
            buf += available[: index + 1]
            source.consume(index + 1)
            return total

        used = len(available)
        buf += available
        source.consume(used)
        read += used
        if used == 0:
            return read
