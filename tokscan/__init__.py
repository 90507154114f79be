from tokscan.__version__ import __version__
from tokscan.errors import (
    Errors,
    ScannerError,
    FormatError,
    NoTokenAvailable,
    ReaderError,
    ConfigError
)
from tokscan.reader import Reader
from tokscan.scanner import Scanner, ScannerBuilder
from tokscan.separators import (
    SeparatorChecker,
    is_whitespace,
    is_ascii_whitespace,
    any_of
)
from tokscan.numbers import (
    parse_int,
    parse_hex,
    parse_hex_literal,
    is_int,
    is_hex
)

__all__ = [
    "__version__",
    "Errors",
    "ScannerError",
    "FormatError",
    "NoTokenAvailable",
    "ReaderError",
    "ConfigError",
    "Reader",
    "Scanner",
    "ScannerBuilder",
    "SeparatorChecker",
    "is_whitespace",
    "is_ascii_whitespace",
    "any_of",
    "parse_int",
    "parse_hex",
    "parse_hex_literal",
    "is_int",
    "is_hex",
]
