import string

from typing import Optional, Protocol


class SeparatorChecker(Protocol):
    def __call__(self, char: str) -> bool:
        ...


def is_whitespace(char: str) -> bool:
    return char.isspace()


_ASCII_WHITESPACE = frozenset(string.whitespace)


def is_ascii_whitespace(char: str) -> bool:
    return char in _ASCII_WHITESPACE


def any_of(chars: str,
           base: Optional[SeparatorChecker] = None) -> SeparatorChecker:
    """Create a checker that treats each of `chars` as a separator.

    If `base` is given, characters accepted by `base` are separators too.
    """
    charset = frozenset(chars)

    if base is None:
        return charset.__contains__

    def checker(char: str) -> bool:
        return char in charset or base(char)

    return checker


SEPARATORS: dict[str, SeparatorChecker] = {
    "whitespace": is_whitespace,
    "ascii": is_ascii_whitespace,
}
