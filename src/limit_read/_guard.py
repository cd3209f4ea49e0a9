"""
UTF-8 safe appends into a text buffer.

Text-mode reads delegate to the byte scan while writing straight into a
TextBuffer's backing bytes. Utf8AppendGuard makes sure that whatever happens
during the scan, including an exception raised from inside it or a
KeyboardInterrupt, the buffer only ever exposes bytes that were validated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

from limit_read._errors import InvalidDataError

logger = logging.getLogger(__name__)


class TextBuffer:
    """
    Growable text buffer whose content is always valid UTF-8.

    Reads append to it; len() is its length in bytes. The decoded value is
    available via str() or getvalue().

    Args:
        initial: Optional text to start with
    """

    __slots__ = ("_raw",)

    def __init__(self, initial: str = "") -> None:
        self._raw = bytearray(initial.encode("utf-8"))

    def getvalue(self) -> str:
        """Return the buffered text."""
        return self._raw.decode("utf-8")

    def as_bytes(self) -> bytes:
        """Return the buffered text as UTF-8 bytes."""
        return bytes(self._raw)

    def clear(self) -> None:
        """Remove all content."""
        self._raw.clear()

    def __len__(self) -> int:
        return len(self._raw)

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.getvalue()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return self._raw == other._raw
        if isinstance(other, str):
            return self.getvalue() == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


class Utf8AppendGuard:
    """
    Context manager exposing a TextBuffer's backing bytes for appending.

    On entry the current length is recorded as the commit point. commit()
    moves the commit point to the current end once the new bytes have been
    checked. On exit, however the block is left, the backing bytes are
    truncated to the commit point.

    Usage:

        with Utf8AppendGuard(buf) as guard:
            scan(guard.raw)
            if guard.pending_is_valid():
                guard.commit()
    """

    def __init__(self, buf: TextBuffer) -> None:
        self._buf = buf
        self._committed = len(buf._raw)

    @property
    def raw(self) -> bytearray:
        """The backing bytes. Callers may only append to it."""
        return self._buf._raw

    @property
    def committed(self) -> int:
        """Length of the validated prefix."""
        return self._committed

    def pending_is_valid(self) -> bool:
        """Check that the bytes after the commit point are valid UTF-8."""
        try:
            self._buf._raw[self._committed :].decode("utf-8")
        except UnicodeDecodeError:
            return False
        return True

    def commit(self) -> None:
        self._committed = len(self._buf._raw)

    def __enter__(self) -> Utf8AppendGuard:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        del self._buf._raw[self._committed :]


def append_to_text(
    buf: TextBuffer,
    max_length: int,
    scan: Callable[[bytearray, int], int],
) -> int:
    """
    Run a byte scan into buf, keeping only what is valid UTF-8.

    Only the newly appended range is validated. If it is valid it is
    committed, whether or not the scan raised. If it is invalid and the scan
    succeeded, InvalidDataError is raised. If it is invalid and the scan
    raised, the scan's exception is re-raised unchanged. In both invalid
    cases the guard restores the buffer to its content before the call.

    Args:
        buf: The text buffer to append to
        max_length: Passed through to scan
        scan: Byte scan writing into the given bytearray

    Returns:
        The count returned by scan

    Raises:
        InvalidDataError: If the scan succeeded but appended invalid UTF-8
    """
    with Utf8AppendGuard(buf) as guard:
        try:
            count = scan(guard.raw, max_length)
        except Exception:
            if guard.pending_is_valid():
                guard.commit()
            raise

        start = guard.committed
        try:
            guard.raw[start:].decode("utf-8")
        except UnicodeDecodeError as e:
            logger.debug(
                "Discarding %d bytes of invalid UTF-8", len(guard.raw) - start
            )
            raise InvalidDataError(details=e.reason) from e
        guard.commit()
        return count
