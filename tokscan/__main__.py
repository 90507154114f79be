import logging

from contextlib import contextmanager
from pathlib import Path

import click

from tokscan.__version__ import __version__
from tokscan.errors import ScannerError
from tokscan.main import create_config, open_scanner, iter_lines
from tokscan.record import read_records

logger = logging.getLogger("tokscan.cli")


@contextmanager
def reporting_errors():
    try:
        yield
    except (ScannerError, OSError, UnicodeError) as e:
        raise click.ClickException(str(e)) from e


def scanner_options(fn):
    fn = click.option("-v", "--verbose", is_flag=True)(fn)
    fn = click.option("-c", "--config", "config_file",
                      type=click.Path(exists=True, dir_okay=False,
                                      readable=True, path_type=Path),
                      help="python file with scanner options")(fn)
    fn = click.option("-d", "--define", multiple=True, metavar="NAME=VALUE",
                      help="set scanner option")(fn)
    fn = click.argument("file", type=click.File("rb"))(fn)
    return fn


@click.group()
@click.version_option(__version__, prog_name="tokscan")
def main():
    pass


@main.command()
@scanner_options
@click.option("--json", "as_json", is_flag=True,
              help="print a JSON record per token")
def tokens(file, define, config_file, verbose, as_json):
    """Print tokens of FILE, one input line per output line."""
    with reporting_errors():
        config = create_config(define, config_file)
        with open_scanner(file, config, verbose=verbose) as scanner:
            if as_json:
                for record in read_records(scanner):
                    click.echo(record.to_json())
            else:
                for line in iter_lines(scanner):
                    click.echo(line)


@main.command()
@scanner_options
@click.option("--strict", is_flag=True,
              help="fail on tokens that are not numbers")
def numbers(file, define, config_file, verbose, strict):
    """Print values of decimal and 0x... hexadecimal tokens of FILE."""
    with reporting_errors():
        config = create_config(define, config_file)
        with open_scanner(file, config, verbose=verbose) as scanner:
            for record in read_records(scanner):
                if record.is_number:
                    click.echo(record.value)
                elif strict:
                    raise click.ClickException(
                        f"not a number: {record.text!r}")
                else:
                    logger.info("skipping %r", record.text)


if __name__ == "__main__":
    main()
