"""Command line interface for bem.

Reads a BEM file, parses it and prints the block as JSON (or as
canonical BEM text). Syntax errors go to stderr with a non-zero exit code.
"""

import sys
from pathlib import Path
from typing import Optional

import click

from bem import __version__
from bem.config import settings
from bem.log import get_logger, setup_logging
from bem.parsers.notation import (
    BEMParser,
    BEMSerializer,
    NotationError,
    to_json,
)

logger = get_logger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the result to this file instead of stdout.",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["json", "bem"]),
    default="json",
    show_default=True,
    help="Output JSON or canonical BEM notation.",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=None,
    help="Pretty-print JSON with this indent.",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Logging level (defaults to BEM_LOG_LEVEL).",
)
@click.version_option(__version__, prog_name="bem")
def main(
    path: Path,
    output: Optional[Path],
    output_format: str,
    indent: Optional[int],
    log_level: Optional[str],
) -> None:
    """Parse the BEM file at PATH."""
    setup_logging(level=log_level)
    logger.info("reading_input", path=str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise click.FileError(str(path), hint=f"not valid UTF-8 ({e.reason})")

    try:
        block = BEMParser().parse(text)
    except NotationError as e:
        click.echo(f"{path}: {e}", err=True)
        sys.exit(1)

    if output_format == "bem":
        result = BEMSerializer().serialize(block)
    else:
        if indent is None:
            indent = settings.json_indent
        result = to_json(block, indent=indent)

    if not result.endswith("\n"):
        result += "\n"

    if output:
        output.write_text(result, encoding="utf-8")
        logger.info("wrote_output", path=str(output))
    else:
        click.echo(result, nl=False)


if __name__ == "__main__":
    main()
