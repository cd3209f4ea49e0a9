"""
limit-read

Bounded delimiter and line reading over buffered byte streams.

Reading lines from a peer you do not control with readline() lets a single
line grow without limit. limit-read caps each record at a configured length
and keeps text buffers valid UTF-8 even when a read fails partway.

Example usage:
    >>> from limit_read import LimitReader, TextBuffer
    >>>
    >>> reader = LimitReader(b"alpha\\r\\nbeta\\n", max_length=16)
    >>> list(reader.lines())
    ['alpha', 'beta']
    >>>
    >>> reader = LimitReader(b"a;bb;ccc")
    >>> list(reader.split(b";", max_length=4))
    [b'a', b'bb', b'ccc']
"""

from importlib.metadata import PackageNotFoundError, version

from limit_read._errors import (
    InvalidDataError,
    LimitReadError,
    SizeExceededError,
)
from limit_read._guard import TextBuffer
from limit_read._iter import Lines, Split
from limit_read._source import ChunkSource, PeekableSource, as_buffered_source
from limit_read._types import (
    DEFAULT_MAX_LENGTH,
    BufferedSource,
    DelimiterLike,
)
from limit_read.reader import LimitReader

__all__ = [
    # Types
    "BufferedSource",
    "DelimiterLike",
    "TextBuffer",
    "DEFAULT_MAX_LENGTH",
    # Errors
    "LimitReadError",
    "SizeExceededError",
    "InvalidDataError",
    # Sources
    "ChunkSource",
    "PeekableSource",
    "as_buffered_source",
    # Reader and iterators
    "LimitReader",
    "Split",
    "Lines",
]

# Use importlib.metadata for version (works with installed package)
# Fall back to hard-coded version for editable installs
try:
    __version__ = version("limit-read")
except PackageNotFoundError:
    __version__ = "0.1.0"
