"""
Converts a txt2tags source file to HTML, a man page or MediaWiki text.
The result is printed to stdout unless an output file is given.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import SUPPORTED_TARGETS, ConfigError, apply_overrides, build_config
from .converter import ConvertFileError, convert_file
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
    write_output,
)

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="txt2tags-lite")
@click.option(
    "--target",
    "-t",
    type=click.Choice(SUPPORTED_TARGETS, case_sensitive=False),
    help="Output format",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the result to this file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Log conversion details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    target: str | None = None,
    output: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a txt2tags source file.

    Args:
        filepath: Path to the source file to convert.
        target: Override for the output target.
        output: Destination file; stdout when omitted.
        verbose: Whether to log mode changes and nesting to stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is invalid or the configuration holds
            unsupported values.
        click.ClickException: If limits are exceeded, the file cannot be read
            or the output cannot be written.

    Examples:
        txt2tags-lite manual.t2t --target man -o manual.1
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(filepath.parent, target=target)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = apply_overrides(
            config,
            max_file_size=get_max_file_size(default=config.max_file_size),
            max_line_length=get_max_line_length(default=config.max_line_length),
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        rendered = convert_file(filepath, config=config)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    if output is None:
        print(rendered, end="")
        return

    try:
        write_output(
            Path(output),
            rendered,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
