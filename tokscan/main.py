import io
import logging

from pathlib import Path
from typing import Iterable, Iterator, Optional

from tokscan.config import Config, SCANNER_OPTIONS, read_file, scanner_config
from tokscan.reader import Reader
from tokscan.scanner import Scanner, ScannerBuilder

logging.basicConfig(format="{name}: {message}", style="{")
logger = logging.getLogger("tokscan")


def create_config(options: Optional[Iterable[str]] = None,
                  config_file: Optional[Path] = None) -> Config:
    """Build the scanner config.

    Options from the `config_file` come first, `name=value` strings from
    `options` are applied on top of them.
    """
    if config_file:
        config = read_file(SCANNER_OPTIONS, config_file)
    else:
        config = scanner_config()

    options = list(options or ())
    if options:
        config.parse(options)
    config.validate()
    return config


def open_scanner(source: str | io.IOBase | Reader,
                 config: Optional[Config] = None,
                 verbose=False) -> Scanner:
    if verbose:
        logger.setLevel(logging.INFO)

    if config is None:
        config = scanner_config()

    builder = ScannerBuilder.from_config(source, config)

    logger.info("scanning %s, line separator %r",
                getattr(source, 'name', '<string>'), builder.line_separator)
    return builder.build()


def iter_lines(scanner: Scanner) -> Iterator[str]:
    """Join tokens back into lines.

    Tokens on one line are separated by a single space. Skipped lines
    between tokens are kept as empty lines, leading ones are dropped.
    """
    line: list[str] = []
    while scanner.has_next():
        skipped = scanner.skipped_lines
        if line and skipped:
            yield ' '.join(line)
            line = []
            for _ in range(skipped - 1):
                yield ""
        line.append(scanner.next())
    if line:
        yield ' '.join(line)
