from __future__ import annotations

import io

from typing import Optional

from .errors import ReaderError


class Reader:
    """
    Reads the source and produces a stream of characters.

    Reader accepts strings, text streams and binary streams. Binary
    streams are decoded with the given encoding.

    `mark` and `reset` allow to step back by at most `limit` characters
    read after the mark.
    """

    def __init__(self,
                 stream: str | io.IOBase,
                 bufsize=4096,
                 encoding="utf-8"):
        self.buffer = ""
        self.stream = None
        self.name = None
        self.bufsize = bufsize
        self.eof = False
        self.closed = False
        self.pointer = 0
        self.line = 1
        self.column = 0

        self._mark: Optional[tuple[int, int, int]] = None
        self._mark_limit = 0

        if isinstance(stream, str):
            self.name = "<string>"
            self.buffer = stream
        elif isinstance(stream, io.IOBase):
            self.name = getattr(stream, 'name', '<stream>')

            if not stream.readable():
                raise ValueError(f"stream must be readable: {self.name}")

            if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
                stream = io.TextIOWrapper(stream, encoding=encoding,
                                          newline="")
            self.stream = stream
        else:
            raise TypeError(f"expected str or stream, got {type(stream)}")

    def __iter__(self) -> Reader:
        return self

    def __next__(self) -> str:
        char = self.read()
        if not char:
            raise StopIteration
        return char

    def read(self) -> str:
        """Read one character. Return an empty string at the end of input."""
        if self.closed:
            raise ReaderError(f"reader is closed: {self.name}")
        if self.pointer == len(self.buffer):
            self.update()
            if self.pointer == len(self.buffer):
                self.eof = True
                return ""
        char = self.buffer[self.pointer]
        if char == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        self.pointer += 1
        return char

    def mark(self, limit: int) -> None:
        """Remember the current position.

        The mark stays valid while no more than `limit` characters are
        read after it.
        """
        if limit < 0:
            raise ValueError(f"mark limit must not be negative: {limit}")
        self._mark = (self.pointer, self.line, self.column)
        self._mark_limit = limit

    def reset(self) -> None:
        """Return to the position saved by the last `mark` call."""
        if self._mark is None:
            raise ReaderError("reset without a valid mark")
        pointer, line, column = self._mark
        if self.pointer - pointer > self._mark_limit:
            self._mark = None
            raise ReaderError(
                f"mark invalidated: read past limit {self._mark_limit}")
        self.pointer, self.line, self.column = pointer, line, column

    def update(self, length: int = 1) -> None:
        if self.stream is None or self.eof:
            return
        start = self.pointer
        if (self._mark is not None
                and self.pointer - self._mark[0] > self._mark_limit):
            self._mark = None
        if self._mark is not None:
            start = min(start, self._mark[0])
            self._mark = (self._mark[0] - start, *self._mark[1:])
        self.buffer = self.buffer[start:]
        self.pointer -= start
        while len(self.buffer) - self.pointer < length:
            data = self.stream.read(self.bufsize)
            if data:
                self.buffer += data
            else:
                self.eof = True
                break

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._mark = None
        if self.stream is not None:
            self.stream.close()
