"""Fixed width integer parsing.

Decimal tokens are parsed strictly: an optional sign followed by ASCII
digits. Hexadecimal tokens carry a `0x` prefix. A hex number that does not
fit into the signed range is read as a two's complement bit pattern of
its digits, so `0xffffffff` gives -1 for 32 bit integers.
"""

import re

from .errors import Errors, FormatError

INT_BITS = 32
INT_WIDTHS = (8, 16, 32, 64)

HEX_PREFIX = "0x"

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_HEX = re.compile(r"[+-]?[0-9a-fA-F]+")
_HEX_DIGITS = "0123456789abcdef"


def int_range(bits: int = INT_BITS) -> tuple[int, int]:
    """Return the lowest and the highest signed `bits` wide integer."""
    if bits <= 0:
        raise ValueError(f"integer width must be positive: {bits}")
    high = 1 << (bits - 1)
    return -high, high - 1


def _parse_signed(text: str, base: int, bits: int) -> int:
    pattern, what = ((_DECIMAL, Errors.NOT_DECIMAL) if base == 10
                     else (_HEX, Errors.NOT_HEX))
    if not pattern.fullmatch(text):
        raise FormatError(what, text)
    value = int(text, base)
    low, high = int_range(bits)
    if not low <= value <= high:
        raise FormatError(Errors.OVERFLOW, text)
    return value


def parse_int(text: str, bits: int = INT_BITS) -> int:
    """Parse a signed decimal integer.

    Raises:
        FormatError: text is not a decimal number or does not fit
            into `bits`.
    """
    return _parse_signed(text, 10, bits)


def complement_hex(digits: str) -> str:
    """Complement each hex digit against 0xf and prefix a minus sign.

    Characters that are not lowercase hex digits are kept as is.
    """
    comp = ["-"]
    for c in digits:
        i = _HEX_DIGITS.find(c)
        comp.append(c if i < 0 else _HEX_DIGITS[15 - i])
    return ''.join(comp)


def parse_hex(digits: str, bits: int = INT_BITS) -> int:
    """Parse hexadecimal digits without the prefix.

    If the digits do not fit into the signed range, they are decoded as
    a two's complement pattern: with `c` being the digit-wise complement
    of the digits, the result is `-c - 1`.

    Raises:
        FormatError
    """
    digits = digits.lower()
    try:
        return _parse_signed(digits, 16, bits)
    except FormatError:
        try:
            value = _parse_signed(complement_hex(digits), 16, bits) - 1
        except FormatError:
            what = Errors.OVERFLOW if _HEX.fullmatch(digits) else Errors.NOT_HEX
            raise FormatError(what, digits) from None

    low, _ = int_range(bits)
    if value < low:
        raise FormatError(Errors.OVERFLOW, digits)
    return value


def parse_hex_literal(token: str, bits: int = INT_BITS) -> int:
    """Parse a `0x` prefixed hexadecimal token."""
    check_hex_prefix(token)
    return parse_hex(token[len(HEX_PREFIX):], bits)


def check_hex_prefix(token: str) -> None:
    if (len(token) <= len(HEX_PREFIX)
            or not token.lower().startswith(HEX_PREFIX)):
        raise FormatError(Errors.NOT_HEX, token)


def is_int(token: str, bits: int = INT_BITS) -> bool:
    try:
        parse_int(token, bits)
    except FormatError:
        return False
    return True


def is_hex(token: str, bits: int = INT_BITS) -> bool:
    try:
        parse_hex_literal(token, bits)
    except FormatError:
        return False
    return True
