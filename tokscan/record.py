# NOTE: __future__.annotations can cause problems with dataclasses_json
from enum import StrEnum
from dataclasses import dataclass
from typing import Optional

from dataclasses_json import DataClassJsonMixin

from .errors import NoTokenAvailable
from .scanner import Scanner


class Kind(StrEnum):
    WORD = "word"
    INT = "int"
    HEX = "hex"


@dataclass
class TokenRecord(DataClassJsonMixin):
    text: str
    kind: Kind = Kind.WORD
    value: Optional[int] = None
    skipped_lines: int = 0

    @property
    def is_number(self) -> bool:
        return self.value is not None


def read_record(scanner: Scanner) -> TokenRecord:
    """Consume the next token and describe it.

    Raises:
        NoTokenAvailable
    """
    skipped_lines = scanner.skipped_lines
    if scanner.has_next_hex():
        text = scanner.peek()
        return TokenRecord(text, Kind.HEX, scanner.next_hex(), skipped_lines)
    if scanner.has_next_int():
        text = scanner.peek()
        return TokenRecord(text, Kind.INT, scanner.next_int(), skipped_lines)

    text = scanner.next()
    if text is None:
        raise NoTokenAvailable
    return TokenRecord(text, skipped_lines=skipped_lines)


def read_records(scanner: Scanner):
    while scanner.has_next():
        yield read_record(scanner)
