import json
import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from bwfmeta.cli.validators import validate_indent_string
from bwfmeta.format import (
    ParseOptions,
    ParseResult,
    RiffError,
    format_report,
    parse_file,
    result_to_dict,
)

app = App(name="bwfmeta", help="Inspect fmt, bext and iXML metadata in Broadcast WAV files")
console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error message in red."""
    err_console.print(message, style="bold red", markup=False)


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(message, style="bold green", markup=False)


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr through rich."""
    logger = logging.getLogger("bwfmeta")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


def _load(file: Path, options: ParseOptions | None = None) -> ParseResult | None:
    """Parse a file, printing the error and returning None on failure."""
    try:
        return parse_file(file, options)
    except RiffError as e:
        print_error(f"Error: {e}")
        return None


@app.command
def info(
    file: Path,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
    raw_xml: bool = False,
    indent: Annotated[str, Parameter(validator=validate_indent_string)] = "  ",
    verbose: bool = False,
) -> int:
    """
    Display the format, bext and iXML metadata of a WAV file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    output_json: bool
        Output results as JSON (default: False)
    raw_xml: bool
        Show the iXML payload exactly as stored instead of re-indented
    indent: str
        Indent unit for re-indented iXML
    verbose: bool
        Log each chunk as it is walked
    """
    configure_logging(verbose)

    result = _load(file, ParseOptions(pretty_xml=not raw_xml, xml_indent=indent))
    if result is None:
        return 1

    if output_json:
        console.print_json(json.dumps(result_to_dict(result)))
        return 0

    console.print(f"File: {file}", markup=False, highlight=False)
    console.print("")
    console.print(
        format_report(result, raw_xml=raw_xml),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


@app.command
def chunks(
    file: Path,
    output_json: Annotated[bool, Parameter(name=["--json"])] = False,
    verbose: bool = False,
) -> int:
    """
    List every chunk in a WAV file.

    Parameters
    ----------
    file: Path
        The path to the .wav file
    output_json: bool
        Output results as JSON (default: False)
    verbose: bool
        Log each chunk as it is walked
    """
    configure_logging(verbose)

    result = _load(file)
    if result is None:
        return 1

    if output_json:
        console.print_json(json.dumps(result_to_dict(result)["chunks"]))
        return 0

    table = Table(title=escape(str(file)))
    table.add_column("ID", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Offset", justify="right")
    for chunk in result.chunks:
        table.add_row(escape(repr(chunk.label)), f"{chunk.size:,}", f"{chunk.offset:,}")

    console.print(table)
    print_success(f"{len(result.chunks)} chunks")
    return 0


if __name__ == "__main__":
    sys.exit(app())
