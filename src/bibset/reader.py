"""Line-oriented reader over binary streams."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 2048


class LineReader:
    """Iterate over the newline-delimited lines of a binary stream.

    Each line is returned without its trailing ``\\n`` and without a ``\\r``
    immediately before it, so CRLF input reads the same as LF input. Blank
    physical lines are returned as ``b""``. Lines longer than the internal
    buffer are reassembled before being returned.

    ``line_num`` is the 1-based number of the last line returned and
    ``offset`` the number of bytes consumed so far, terminators included.
    Read errors from the underlying stream propagate unchanged. The reader
    cannot be restarted once exhausted.
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if isinstance(stream, io.RawIOBase):
            stream = io.BufferedReader(stream, buffer_size)  # type: ignore[assignment]
        self._stream = stream
        self.line_num = 0
        self.offset = 0

    def __iter__(self) -> LineReader:
        return self

    def __next__(self) -> bytes:
        raw = self._stream.readline()
        if not raw:
            raise StopIteration
        self.line_num += 1
        self.offset += len(raw)

        line = raw[:-1] if raw.endswith(b"\n") else raw
        if line.endswith(b"\r"):
            line = line[:-1]
        return line
