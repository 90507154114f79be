from enum import StrEnum


class Errors(StrEnum):
    NOT_DECIMAL = "not-decimal"
    NOT_HEX = "not-hex"
    OVERFLOW = "overflow"


class ScannerError(Exception):
    pass


class FormatError(ScannerError, ValueError):
    """Token text does not match the requested number format."""

    def __init__(self, what: Errors, text: str):
        super().__init__(what, text)
        self.what = what
        self.text = text

    def __str__(self):
        return f"{self.what}: {self.text!r}"


class NoTokenAvailable(ScannerError, LookupError):
    def __init__(self, msg="no token available"):
        super().__init__(msg)


class ReaderError(ScannerError):
    pass


class ConfigError(ScannerError, ValueError):
    """Exception class for Config related errors."""
