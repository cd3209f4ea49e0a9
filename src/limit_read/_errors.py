"""
Exception hierarchy for the limit-read library.

Source failures are not wrapped: whatever the buffered source raises
(OSError, httpx.HTTPError, ...) reaches the caller unchanged. The classes
here cover the conditions the library itself detects.
"""

from typing import Any


class LimitReadError(Exception):
    """
    Base exception for all limit-read errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.code is not None:
            parts.append(f"[{self.code}]")
        return " ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class SizeExceededError(LimitReadError):
    """
    Exception raised when a delimiter is found past the configured bound.

    The bound is checked only at the moment the delimiter is located, so this
    shares its code with "delimiter not found": within one bounded read the
    delimiter was not found inside the allowed range.

    Attributes:
        max_length: The configured bound
        length: The cumulative length the record would have had, delimiter
            included
    """

    def __init__(
        self,
        max_length: int,
        length: int,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Delimiter not found within {max_length} bytes "
                f"(record would be {length} bytes)"
            )
        super().__init__(message, code="NOT_FOUND")
        self.max_length = max_length
        self.length = length


class InvalidDataError(LimitReadError, ValueError):
    """
    Exception raised when bytes read in text mode are not valid UTF-8.

    The text buffer is left exactly as it was before the read. The underlying
    UnicodeDecodeError is chained as __cause__.
    """

    def __init__(
        self,
        message: str = "stream did not contain valid UTF-8",
        details: Any = None,
    ) -> None:
        super().__init__(message, code="INVALID_DATA", details=details)
