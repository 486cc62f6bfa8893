"""
Renders a note written in the nous Markdown subset to an HTML fragment.
The HTML goes to stdout unless an output file is given.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .exceptions import NoteFileError
from .filesystem import get_max_file_size, read_note, resolve_note_path, write_output
from .lexer import tokenize
from .models import TokenKind
from .parser import render_file

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="nous-markdown")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the HTML to this file")
@click.option("--lists/--no-lists", default=None, help="Render '- ' items as HTML lists")
@click.option("--bold/--no-bold", default=None, help="Render '*' pairs as bold")
@click.option("--escape-text/--no-escape-text", default=None, help="HTML-escape note text")
@click.option("--tokens", "show_tokens", is_flag=True, help="Print the token stream instead")
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    lists: bool | None = None,
    bold: bool | None = None,
    escape_text: bool | None = None,
    show_tokens: bool = False,
    verbose: bool = False,
):
    """
    Entry point for rendering a note to HTML.

    Args:
        filepath: Path to the note to render.
        output: Destination file; stdout when omitted.
        lists: Override for list rendering.
        bold: Override for bold rendering.
        escape_text: Override for escaping note text.
        show_tokens: Print one line per token instead of HTML.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If size limits, reading, or writing fail.

    Examples:
        nous-markdown today.md --no-bold -o today.html
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        filepath = resolve_note_path(filepath, Path.cwd().resolve())
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(filepath.parent, lists=lists, bold=bold, escape_text=escape_text)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = apply_overrides(config, max_file_size=get_max_file_size(config.max_file_size))
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        if show_tokens:
            tokens = tokenize(read_note(filepath, config.max_file_size), name=filepath.name)
            for token in tokens:
                click.echo(str(token) if token.kind is TokenKind.EOF else f"{token.kind.name} {token}")
            return
        rendered = render_file(filepath, config)
    except NoteFileError as error:
        raise click.ClickException(str(error)) from error

    # Writes to file
    if output is not None:
        target = Path(output).expanduser().resolve()
        if target == filepath:
            raise click.BadParameter("Output file must differ from the input note")
        try:
            write_output(target, rendered)
        except NoteFileError as error:
            raise click.ClickException(str(error)) from error
    # Prints
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    cli()
