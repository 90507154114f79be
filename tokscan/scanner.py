from __future__ import annotations

import io
import os
import logging

from typing import Iterator, Optional, TYPE_CHECKING

from .errors import ConfigError, NoTokenAvailable
from .numbers import (
    INT_BITS,
    INT_WIDTHS,
    check_hex_prefix,
    parse_int,
    parse_hex,
    is_int,
    is_hex
)
from .reader import Reader
from .separators import SeparatorChecker, SEPARATORS, any_of, is_whitespace

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger("tokscan.scanner")


class Scanner:
    """Whitespace delimited token scanner with one token lookahead.

    Each call of `next` (or `next_int`, `next_hex`) returns the token
    fetched by the previous call and fetches a new one. Scanner owns the
    reader and closes it in `close`; use it as a context manager.

    Create scanners with `ScannerBuilder`.
    """

    def __init__(self,
                 reader: Reader,
                 checker: SeparatorChecker = is_whitespace,
                 line_separator: str = os.linesep,
                 int_bits: int = INT_BITS):
        if not line_separator:
            raise ConfigError("line separator must not be empty")
        self.reader = reader
        self.checker = checker
        self.line_separator = line_separator
        self.int_bits = int_bits

        self._token: Optional[str] = None
        self._skipped_lines = 0
        self._last_read: Optional[str] = None

        self._fetch()

    def _fetch(self) -> None:
        self._skipped_lines = 0
        chars: list[str] = []

        char = self._last_read
        if char is None:
            char = self.reader.read()

        while char:
            if self.checker(char):
                if chars:
                    self._last_read = char
                    self._token = ''.join(chars)
                    logger.debug("token %r after %d line(s)",
                                 self._token, self._skipped_lines)
                    return
                if char == self.line_separator[0]:
                    self._match_line_separator()
            else:
                chars.append(char)
            char = self.reader.read()

        self._last_read = ""
        self._token = ''.join(chars) if chars else None
        logger.debug("end of input, last token %r", self._token)

    def _match_line_separator(self) -> None:
        self.reader.mark(len(self.line_separator) + 1)
        self._skipped_lines += 1
        for expected in self.line_separator[1:]:
            char = self.reader.read()
            if char != expected:
                self.reader.reset()
                self._skipped_lines -= 1
                break

    def next(self) -> Optional[str]:
        """Return the fetched token and fetch a new one.

        Returns None if there are no more tokens.
        """
        token = self._token
        self._fetch()
        return token

    def peek(self) -> Optional[str]:
        """Return the fetched token without consuming it."""
        return self._token

    def next_int(self) -> int:
        """Consume the fetched token and parse it as a decimal integer.

        Raises:
            NoTokenAvailable: no more tokens.
            FormatError: the token is not a decimal integer. The token is
                consumed anyway.
        """
        token = self.next()
        if token is None:
            raise NoTokenAvailable
        return parse_int(token, self.int_bits)

    def next_hex(self) -> int:
        """Consume the fetched token and parse it as a `0x...` number.

        A token without the prefix or without digits is not consumed.

        Raises:
            NoTokenAvailable: no more tokens.
            FormatError
        """
        if self._token is None:
            raise NoTokenAvailable
        check_hex_prefix(self._token)
        token = self.next()
        return parse_hex(token[2:], self.int_bits)

    def has_next(self) -> bool:
        return self._token is not None

    def has_next_int(self) -> bool:
        return self.has_next() and is_int(self._token, self.int_bits)

    def has_next_hex(self) -> bool:
        return self.has_next() and is_hex(self._token, self.int_bits)

    def on_new_line(self) -> bool:
        """Check if the fetched token starts on a new line."""
        return self._skipped_lines > 0

    @property
    def skipped_lines(self) -> int:
        """Number of line separators before the fetched token."""
        return self._skipped_lines

    def close(self) -> None:
        self.reader.close()

    def __enter__(self) -> Scanner:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        while self.has_next():
            yield self.next()

    def __repr__(self):
        return (f"Scanner({self.reader.name!r}, token={self._token!r}, "
                f"skipped_lines={self._skipped_lines})")


class ScannerBuilder:
    """Collects scanner settings.

    The source is a string, a text or binary stream, or a `Reader`.
    `build` fetches the first token, so it reads from the source.
    """

    def __init__(self, source: str | io.IOBase | Reader):
        self.source = source
        self.checker: SeparatorChecker = is_whitespace
        self.line_separator = os.linesep
        self.int_bits = INT_BITS
        self.bufsize = 4096
        self.encoding = "utf-8"

    @classmethod
    def from_config(cls,
                    source: str | io.IOBase | Reader,
                    config: Config) -> ScannerBuilder:
        """Create the builder from `SCANNER_OPTIONS` config."""
        checker = SEPARATORS[config.separators]
        if config.delimiters:
            checker = any_of(config.delimiters, checker)
        return (cls(source)
                .set_separator_checker(checker)
                .set_line_separator(config.line_separator)
                .set_int_bits(config.int_bits)
                .set_buffer_size(config.bufsize)
                .set_encoding(config.encoding))

    def set_separator_checker(self, checker: SeparatorChecker):
        self.checker = checker
        return self

    def set_line_separator(self, line_separator: str):
        self.line_separator = line_separator
        return self

    def set_int_bits(self, bits: int):
        if bits not in INT_WIDTHS:
            raise ConfigError(f"integer width must be one of {INT_WIDTHS}, "
                              f"got {bits}")
        self.int_bits = bits
        return self

    def set_buffer_size(self, bufsize: int):
        if bufsize <= 0:
            raise ConfigError(f"buffer size must be positive: {bufsize}")
        self.bufsize = bufsize
        return self

    def set_encoding(self, encoding: str):
        self.encoding = encoding
        return self

    def build(self) -> Scanner:
        if isinstance(self.source, Reader):
            reader = self.source
        else:
            reader = Reader(self.source,
                            bufsize=self.bufsize,
                            encoding=self.encoding)
        try:
            return Scanner(reader,
                           checker=self.checker,
                           line_separator=self.line_separator,
                           int_bits=self.int_bits)
        except Exception:
            reader.close()
            raise
