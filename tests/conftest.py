"""
Pytest configuration and fixtures for limit-read tests.

ScriptedSource is a BufferedSource driven by a list of steps, so tests can
control chunk boundaries, interruptions and failures exactly.
"""

from collections.abc import Callable, Sequence

import pytest


class ScriptedSource:
    """
    BufferedSource replaying a script of chunks and exceptions.

    Each step is either a bytes chunk, which becomes the buffered data once
    the previous chunk is fully consumed, or an exception instance, which is
    raised by the fill_buf() call that reaches it.
    """

    def __init__(self, steps: Sequence[bytes | BaseException]) -> None:
        self._steps = list(steps)
        self._buffer = b""
        self.fill_calls = 0
        self.consumed = 0
        self.closed = False

    def fill_buf(self) -> bytes:
        self.fill_calls += 1
        while not self._buffer and self._steps:
            step = self._steps.pop(0)
            if isinstance(step, BaseException):
                raise step
            self._buffer = step
        return self._buffer

    def consume(self, amount: int) -> None:
        assert 0 <= amount <= len(self._buffer)
        self._buffer = self._buffer[amount:]
        self.consumed += amount

    def remaining(self) -> bytes:
        """Everything not yet consumed, without raising scripted errors."""
        rest = [s for s in self._steps if isinstance(s, bytes)]
        return self._buffer + b"".join(rest)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted() -> Callable[..., ScriptedSource]:
    """Factory for ScriptedSource instances."""

    def make(*steps: bytes | BaseException) -> ScriptedSource:
        return ScriptedSource(steps)

    return make


@pytest.fixture
def ten_ones() -> Callable[..., bytes]:
    """Ten bytes of value 1 with the given indices replaced by a byte."""

    def make(replacement: bytes, *indices: int) -> bytes:
        data = bytearray(b"\x01" * 10)
        for index in indices:
            data[index] = replacement[0]
        return bytes(data)

    return make
