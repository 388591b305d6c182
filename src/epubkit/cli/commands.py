"""
Click-based CLI commands for epubkit.

This module provides a small command-line interface using Click with:
- Book metadata and table of contents display (via Rich)
- Cover extraction
- Re-serializing a book through the reader and writer
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..display import RichDisplay, get_valid_log_levels, setup_rich_logger
from ..display.constants import LOGGER_NAME
from ..epub import write_book
from ..models import ReaderSettings
from ..reader import open_book, read_book
from ..utils.exceptions import EpubError


# Initialize Rich console for pretty output
console = Console()

EPUB_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _fail(message: str) -> None:
    RichDisplay(console=console).error(escape(message))
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(get_valid_log_levels(), case_sensitive=False),
    default=None,
    help="Set the logging level for detailed output (logs go to stderr). "
    "Defaults to EPUBKIT_LOG_LEVEL or WARNING.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """
    epubkit - Read, inspect and rewrite EPUB 2 and EPUB 3 books.

    \b
    Examples:
      # Show title, authors and publication data
      epubkit info book.epub

      # Print the chapter tree
      epubkit toc book.epub

      # Extract the cover image
      epubkit cover book.epub -o cover.jpg

      # Enable debug logging
      epubkit --log-level DEBUG info book.epub
    """
    setup_rich_logger(LOGGER_NAME, log_level or ReaderSettings().log_level)

    # If no subcommand is given, show help
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("path", type=EPUB_FILE)
def info(path: Path) -> None:
    """Display the metadata of an EPUB file."""
    try:
        with open_book(path) as book:
            RichDisplay(console=console).book_info(book)
    except EpubError as e:
        _fail(f"{path}: {e}")


@cli.command()
@click.argument("path", type=EPUB_FILE)
@click.option(
    "--skip-dangling",
    is_flag=True,
    default=False,
    help="Skip table of contents entries pointing at files missing from the manifest.",
)
def toc(path: Path, skip_dangling: bool) -> None:
    """Display the chapter tree of an EPUB file."""
    settings = ReaderSettings(on_dangling_navigation="skip" if skip_dangling else "raise")
    try:
        with open_book(path, settings) as book:
            RichDisplay(console=console).chapter_tree(book.title, book.get_chapters())
    except EpubError as e:
        _fail(f"{path}: {e}")


@cli.command()
@click.argument("path", type=EPUB_FILE)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="File to write the cover image to.",
)
def cover(path: Path, output: Path) -> None:
    """Extract the cover image of an EPUB file."""
    try:
        with open_book(path) as book:
            data = book.read_cover()
    except EpubError as e:
        _fail(f"{path}: {e}")
        return

    if data is None:
        _fail(f"{path} declares no cover image")
        return

    output.write_bytes(data)
    RichDisplay(console=console).success(f"Cover written to {escape(str(output))} ({len(data)} bytes)")


@cli.command()
@click.argument("source", type=EPUB_FILE)
@click.argument("destination", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--workers",
    type=click.IntRange(1, 32),
    default=None,
    help="Number of threads reading content files (default: EPUBKIT_MAX_WORKERS or 4).",
)
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Leave unreadable content files out instead of aborting.",
)
def rewrite(source: Path, destination: Path, workers: int | None, keep_going: bool) -> None:
    """
    Read a whole EPUB file and write it back out.

    The package document and NCX are regenerated from the parsed model; every
    other file is copied as read.
    """
    overrides: dict[str, object] = {"on_content_error": "collect" if keep_going else "raise"}
    if workers is not None:
        overrides["max_workers"] = workers
    settings = ReaderSettings(**overrides)

    try:
        book = read_book(source, settings)
        write_book(book, destination)
    except EpubError as e:
        _fail(f"{source}: {e}")
        return

    display = RichDisplay(console=console)
    for failure in book.failures:
        display.error(f"Left out {escape(failure.path)}: {escape(failure.message)}")
    display.success(f"Wrote {escape(str(destination))}")


@cli.command()
def version() -> None:
    """Display the version of epubkit."""
    console.print(f"[bold cyan]epubkit[/bold cyan] version {__version__}")


# Entry point for the CLI
def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
